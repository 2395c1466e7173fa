from plan_atlas.grouping import group_plans_by_country
from plan_atlas.models import Plan


def test_groups_preserve_first_appearance_and_member_order() -> None:
    plans = [
        Plan(title="A1", country="France"),
        Plan(title="G1", country="Germany"),
        Plan(title="A2", country="France"),
        Plan(title="S1", country="Spain"),
        Plan(title="G2", country="Germany"),
    ]

    grouped = group_plans_by_country(plans)

    assert list(grouped) == ["France", "Germany", "Spain"]
    assert [plan.title for plan in grouped["France"]] == ["A1", "A2"]
    assert [plan.title for plan in grouped["Germany"]] == ["G1", "G2"]


def test_grouping_keys_are_case_sensitive() -> None:
    plans = [Plan(title="1", country="France"), Plan(title="2", country="france")]

    grouped = group_plans_by_country(plans)

    assert list(grouped) == ["France", "france"]


def test_empty_country_is_grouped_under_empty_key() -> None:
    plans = [Plan(title="No country", country=""), Plan(title="Peru plan", country="Peru")]

    grouped = group_plans_by_country(plans)

    assert [plan.title for plan in grouped[""]] == ["No country"]


def test_membership_is_invariant_under_permutation(sample_plans: list[Plan]) -> None:
    forward = group_plans_by_country(sample_plans)
    backward = group_plans_by_country(list(reversed(sample_plans)))

    assert set(forward) == set(backward)
    for country, members in forward.items():
        assert set(members) == set(backward[country])
    assert group_plans_by_country(sample_plans) == forward


def test_empty_collection_yields_no_groups() -> None:
    assert group_plans_by_country([]) == {}

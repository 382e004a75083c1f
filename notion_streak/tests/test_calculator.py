from notion_streak.features.streaks.calculator import MissingPropertyPolicy, calculate_streak
from notion_streak.models.record import Record
from notion_streak.tests.mocks import checkbox, formula_number, notion_page, pages_from_flags, select


def _records(flags):
    return [Record.from_notion(page) for page in pages_from_flags(flags)]


def test_empty_sequence_is_zero():
    assert calculate_streak([]) == 0


def test_stops_at_first_false():
    assert calculate_streak(_records([True, True, False, True])) == 2


def test_leading_false_is_zero():
    assert calculate_streak(_records([False, True])) == 0


def test_all_true_consumes_everything():
    assert calculate_streak(_records([True, True, True])) == 3


def test_never_exceeds_length():
    for flags in ([True], [True, False], [False, False], [True] * 10):
        records = _records(flags)
        assert calculate_streak(records) <= len(records)


def test_mixed_encodings_count_together():
    pages = [
        notion_page("a", checkbox(True)),
        notion_page("b", select("YES")),
        notion_page("c", select("no")),
    ]
    assert calculate_streak([Record.from_notion(p) for p in pages]) == 2


def test_missing_property_breaks_by_default():
    pages = [notion_page("a", checkbox(True)), notion_page("b"), notion_page("c", checkbox(True))]
    assert calculate_streak([Record.from_notion(p) for p in pages]) == 1


def test_skip_policy_passes_over_missing_property():
    pages = [notion_page("a", checkbox(True)), notion_page("b"), notion_page("c", checkbox(True))]
    records = [Record.from_notion(p) for p in pages]
    assert calculate_streak(records, missing_policy=MissingPropertyPolicy.SKIP) == 2


def test_skip_policy_still_breaks_on_undetermined_value():
    pages = [notion_page("a", checkbox(True)), notion_page("b", formula_number(1)), notion_page("c", checkbox(True))]
    records = [Record.from_notion(p) for p in pages]
    assert calculate_streak(records, missing_policy=MissingPropertyPolicy.SKIP) == 1


def test_accepts_any_iterable():
    records = _records([True, True, False])
    assert calculate_streak(iter(records)) == 2

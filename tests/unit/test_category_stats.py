from assessment_forms.domain.services.category_stats import build_category_stats


def test_all_categories_in_fixed_order():
    stats = build_category_stats({"Speech": 2, "Academic": 1})

    assert [s.to_dict() for s in stats] == [
        {"name": "Academic", "count": 1},
        {"name": "Behavioral", "count": 0},
        {"name": "Speech", "count": 2},
        {"name": "Physical", "count": 0},
        {"name": "Social", "count": 0},
    ]


def test_unknown_categories_are_ignored():
    stats = build_category_stats({"Math": 4})

    assert sum(s.count for s in stats) == 0
    assert len(stats) == 5

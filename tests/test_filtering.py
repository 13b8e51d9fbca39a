from yt_viral.services.filtering import ResultsView, filter_by_min_score


def _scored(make_video, scores):
    # subs=10 so viral_score == views / 10
    return [make_video(f"v{i}", views=int(s * 10), subs=10) for i, s in enumerate(scores)]


def test_keeps_scores_at_or_above_threshold_in_order(make_video):
    videos = _scored(make_video, [3.0, 0.2, 1.5, 0.9, 1.8])
    kept = filter_by_min_score(videos, 1.5)
    assert [v.viral_score for v in kept] == [3.0, 1.5, 1.8]


def test_filter_is_idempotent(make_video):
    videos = _scored(make_video, [0.2, 0.9, 1.8, 3.0])
    once = filter_by_min_score(videos, 1.0)
    assert filter_by_min_score(once, 1.0) == once


def test_threshold_is_applied_literally(make_video):
    videos = _scored(make_video, [0.0, 6.0, 0.5])
    assert len(filter_by_min_score(videos, -1.0)) == 3
    assert [v.viral_score for v in filter_by_min_score(videos, 5.5)] == [6.0]
    assert filter_by_min_score(videos, 100.0) == []


def test_slider_move_refilters_full_list(make_video):
    ranked = _scored(make_video, [0.2, 0.9, 1.8, 3.0])
    view = ResultsView().with_results(ranked).with_threshold(0.5)
    assert [v.viral_score for v in view.visible] == [0.9, 1.8, 3.0]

    view = view.with_threshold(1.5)
    assert [v.viral_score for v in view.visible] == [1.8, 3.0]

    # moving back down is not stacked on the previous subset
    view = view.with_threshold(0.0)
    assert len(view.visible) == 4


def test_results_view_is_replaced_wholesale(make_video):
    view = ResultsView().with_results(_scored(make_video, [1.0, 2.0])).with_threshold(1.5)
    fresh = view.with_results(_scored(make_video, [4.0]))
    assert len(fresh.ranked) == 1
    assert fresh.threshold == 1.5
    assert len(view.ranked) == 2

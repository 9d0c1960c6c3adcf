"""Counter updates at the service layer, including interleaved sessions."""
from ishaazi.services.engagement_service import get_engagement_stats, track_like


def test_unlike_at_zero_keeps_like_committed_in_between(db, blog, session_factory):
    other = session_factory()
    original_refresh = db.refresh

    def refresh_after_other_like(instance, *args, **kwargs):
        # Another request likes the item right after this session's UPDATE commits
        db.refresh = original_refresh
        track_like(other, "blogs", blog.id, "like")
        return original_refresh(instance, *args, **kwargs)

    try:
        track_like(db, "blogs", blog.id, "like")
        track_like(db, "blogs", blog.id, "unlike")
        db.refresh = refresh_after_other_like
        assert track_like(db, "blogs", blog.id, "unlike") == 1
    finally:
        db.refresh = original_refresh
        other.close()

    assert get_engagement_stats(db, "blogs", blog.id)["likes"] == 1


def test_repeated_unlikes_stay_at_zero(db, blog):
    for _ in range(3):
        assert track_like(db, "blogs", blog.id, "unlike") == 0
    assert track_like(db, "blogs", blog.id, "like") == 1

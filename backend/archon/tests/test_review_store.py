import threading

from archon.agent.artifacts import ArchitectureModel, ArchitectureReview
from archon.store import ReviewStore


def make_review(review_id: str = "abc123") -> ArchitectureReview:
    return ArchitectureReview(
        id=review_id,
        summary="Summary",
        architecture_model=ArchitectureModel(context="ctx"),
        issues=[],
        recommendations_overview="Recs",
        full_report_markdown="# Report",
        created_at="2026-01-01T00:00:00.000Z",
    )


def test_save_then_find_by_id_round_trips():
    store = ReviewStore()
    review = make_review()

    store.save(review)
    found = store.find_by_id(review.id)

    assert found == review
    assert found.model_dump(by_alias=True) == review.model_dump(by_alias=True)


def test_find_by_unknown_id_returns_none():
    assert ReviewStore().find_by_id("missing") is None


def test_find_all_returns_reviews_in_insertion_order():
    store = ReviewStore()
    for review_id in ("a", "b", "c"):
        store.save(make_review(review_id))

    assert [review.id for review in store.find_all()] == ["a", "b", "c"]
    assert len(store) == 3


def test_concurrent_saves_of_distinct_ids():
    store = ReviewStore()

    def worker(offset: int) -> None:
        for i in range(100):
            store.save(make_review(f"{offset}-{i}"))
            store.find_all()

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store) == 800


def test_saved_review_is_isolated_from_caller_mutation():
    store = ReviewStore()
    review = make_review("r1")
    store.save(review)

    review.architecture_model.context = "tampered"
    review.issues.append("junk")

    found = store.find_by_id("r1")
    assert found.architecture_model.context == "ctx"
    assert found.issues == []


def test_found_review_is_isolated_from_caller_mutation():
    store = ReviewStore()
    store.save(make_review("r1"))

    store.find_by_id("r1").issues.append("junk")
    store.find_all()[0].architecture_model.context = "tampered"

    found = store.find_by_id("r1")
    assert found.architecture_model.context == "ctx"
    assert found.issues == []

import asyncio

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from evercare.services.review_service.app import app
from evercare.services.review_service.dependencies import get_review_service
from evercare.services.review_service.repository import ReviewRepository
from evercare.services.review_service.service import ReviewService
from evercare.shared.models.common import PaginationParams
from evercare.shared.models.review_dto import CreateReviewRequest, ReviewDTO


class InMemoryReviewStore:
    """Хранилище с уникальной парой caregiver/careseeker, как в БД."""

    def __init__(self, template: ReviewDTO):
        self.template = template
        self.rows = {}

    async def upsert_review(self, caregiver_id, careseeker_id, rating, comment):
        await asyncio.sleep(0)
        key = (caregiver_id, careseeker_id)
        created = key not in self.rows
        self.rows[key] = self.template.model_copy(update={"rating": rating, "comment": comment})
        return self.rows[key], created


@pytest.fixture
def mock_repo():
    return AsyncMock()


@pytest.fixture
def review(sample_review_row):
    return ReviewDTO(**sample_review_row)


@pytest.fixture
def client(mock_repo):
    app.dependency_overrides[get_review_service] = lambda: ReviewService(mock_repo)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_submit_creates_new_review(mock_repo, review):
    mock_repo.upsert_review.return_value = (review, True)
    service = ReviewService(mock_repo)

    result, created = await service.submit_review(
        CreateReviewRequest(caregiver_id=3, careseeker_id=4, rating=5)
    )

    assert created is True
    assert result is review
    mock_repo.upsert_review.assert_awaited_once_with(3, 4, 5, "")


@pytest.mark.asyncio
async def test_submit_updates_existing_review(mock_repo, review):
    """Повторный отзыв той же пары обновляет прежний."""
    updated = review.model_copy(update={"rating": 2, "comment": "Changed my mind"})
    mock_repo.upsert_review.return_value = (updated, False)
    service = ReviewService(mock_repo)

    result, created = await service.submit_review(
        CreateReviewRequest(caregiver_id=3, careseeker_id=4, rating=2, comment="Changed my mind")
    )

    assert created is False
    assert result.rating == 2
    mock_repo.upsert_review.assert_awaited_once_with(3, 4, 2, "Changed my mind")
    mock_repo.upsert_review.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_first_reviews_of_pair(review):
    """Две одновременные первые отправки: одна создаёт, другая обновляет."""
    store = InMemoryReviewStore(review)
    service = ReviewService(store)

    results = await asyncio.gather(
        service.submit_review(CreateReviewRequest(caregiver_id=3, careseeker_id=4, rating=5)),
        service.submit_review(CreateReviewRequest(caregiver_id=3, careseeker_id=4, rating=4)),
    )

    assert sorted(created for _, created in results) == [False, True]
    assert len(store.rows) == 1


@pytest.mark.asyncio
async def test_repository_upsert_is_single_statement(mock_db, sample_review_row):
    mock_db.fetchrow.return_value = {**sample_review_row, "created": False}
    repo = ReviewRepository(mock_db)

    review, created = await repo.upsert_review(3, 4, 2, "Changed")

    query = mock_db.fetchrow.await_args.args[0]
    assert "ON CONFLICT (caregiver_id, careseeker_id) DO UPDATE" in query
    assert "(xmax = 0) AS created" in query
    assert mock_db.fetchrow.await_args.args[1:] == (3, 4, 2, "Changed")
    assert created is False
    assert review.review_id == 11


@pytest.mark.asyncio
async def test_caregiver_reviews_page(mock_repo, review):
    mock_repo.get_by_caregiver.return_value = ([review], 21)
    service = ReviewService(mock_repo)

    page = await service.get_caregiver_reviews(3, PaginationParams(page=3, limit=10))

    mock_repo.get_by_caregiver.assert_awaited_once_with(3, 10, 20)
    assert page.total == 21
    assert page.total_pages == 3
    assert page.page == 3


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "average, total, expected",
    [(4.333333, 3, 4.3), (None, 0, 0), (5.0, 1, 5.0)],
)
async def test_caregiver_rating(mock_repo, average, total, expected):
    mock_repo.get_rating.return_value = (average, total)
    service = ReviewService(mock_repo)

    rating = await service.get_caregiver_rating(3)

    assert rating.average_rating == expected
    assert rating.total_reviews == total


@pytest.mark.asyncio
async def test_repository_rating_without_reviews(mock_db):
    mock_db.fetchrow.return_value = {"average_rating": None, "total_reviews": 0}
    repo = ReviewRepository(mock_db)

    assert await repo.get_rating(3) == (None, 0)


@pytest.mark.asyncio
async def test_repository_page_and_total(mock_db, sample_review_row):
    mock_db.fetch.return_value = [sample_review_row]
    mock_db.fetchval.return_value = 1
    repo = ReviewRepository(mock_db)

    reviews, total = await repo.get_by_caregiver(3, 10, 0)

    assert total == 1
    assert reviews[0].review_id == 11
    assert mock_db.fetch.await_args.args[1:] == (3, 10, 0)


@pytest.mark.asyncio
@pytest.mark.parametrize("status, expected", [("DELETE 1", True), ("DELETE 0", False)])
async def test_repository_delete(mock_db, status, expected):
    mock_db.execute.return_value = status
    repo = ReviewRepository(mock_db)

    assert await repo.delete_by_pair(3, 4) is expected


def test_post_review_created(client, mock_repo, review):
    mock_repo.upsert_review.return_value = (review, True)

    response = client.post("/api/reviews", json={"caregiverId": 3, "careseekerId": 4, "rating": 5, "comment": "Great"})

    assert response.status_code == 201
    assert response.json()["message"] == "Review created successfully"
    assert response.json()["review"]["reviewId"] == 11


def test_post_review_updated(client, mock_repo, review):
    mock_repo.upsert_review.return_value = (review, False)

    response = client.post("/api/reviews", json={"caregiverId": 3, "careseekerId": 4, "rating": 5})

    assert response.status_code == 200
    assert response.json()["message"] == "Review updated successfully"


@pytest.mark.parametrize("rating", [0, 6])
def test_post_review_rating_out_of_range(client, mock_repo, rating):
    response = client.post("/api/reviews", json={"caregiverId": 3, "careseekerId": 4, "rating": rating})

    assert response.status_code == 422
    mock_repo.upsert_review.assert_not_called()


def test_get_caregiver_reviews(client, mock_repo, review):
    mock_repo.get_by_caregiver.return_value = ([review], 1)

    response = client.get("/api/reviews/caregiver/3", params={"page": 1, "limit": 5})

    body = response.json()
    assert response.status_code == 200
    assert body["total"] == 1
    assert body["totalPages"] == 1
    assert body["limit"] == 5


def test_get_caregiver_reviews_limit_too_big(client):
    response = client.get("/api/reviews/caregiver/3", params={"limit": 500})

    assert response.status_code == 422


def test_get_rating(client, mock_repo):
    mock_repo.get_rating.return_value = (4.25, 4)

    response = client.get("/api/reviews/caregiver/3/rating")

    assert response.json() == {"caregiverId": 3, "averageRating": 4.2, "totalReviews": 4}


def test_get_review_not_found(client, mock_repo):
    mock_repo.get_by_pair.return_value = None

    response = client.get("/api/reviews/caregiver/3/careseeker/4")

    assert response.status_code == 404
    assert response.json()["detail"] == "Review not found"


def test_delete_review(client, mock_repo):
    mock_repo.delete_by_pair.return_value = True

    response = client.delete("/api/reviews/caregiver/3/careseeker/4")

    assert response.status_code == 200
    assert response.json() == {"message": "Review deleted successfully"}


def test_delete_missing_review(client, mock_repo):
    mock_repo.delete_by_pair.return_value = False

    response = client.delete("/api/reviews/caregiver/3/careseeker/4")

    assert response.status_code == 404

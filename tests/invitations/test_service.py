"""Tests for event applications and admin decisions."""

import time

import pytest

from arthub.invitations import (
    AlreadyAppliedError,
    InvalidStatusError,
    InvitationNotFoundError,
    InvitationService,
)
from arthub.notifications import InvitationStatus
from arthub.store import InMemoryRealtimeStore


@pytest.fixture
def store() -> InMemoryRealtimeStore:
    return InMemoryRealtimeStore(
        {
            "events": {"e1": {"title": "Spring Show"}, "e2": {"title": "Night Market"}},
            "invitations": {
                "e2": {
                    "artist9": {
                        "artistName": "sculptor",
                        "email": "sculptor@example.com",
                        "status": "accepted",
                        "appliedAt": 1000,
                    }
                },
                "e3": {"artist9": {"status": "bogus", "appliedAt": 5000}},
            },
        }
    )


@pytest.fixture
def invitation_service(store: InMemoryRealtimeStore) -> InvitationService:
    return InvitationService(store)


class TestApply:
    @pytest.mark.asyncio
    async def test_creates_pending_record(
        self, invitation_service: InvitationService, store: InMemoryRealtimeStore
    ):
        before = int(time.time())
        invitation = await invitation_service.apply("e1", "artist1", "painter@example.com")

        stored = await store.get("invitations/e1/artist1")
        assert stored["status"] == "pending"
        assert stored["artistName"] == "painter"
        assert stored["email"] == "painter@example.com"
        assert stored["appliedAt"] >= before
        assert invitation.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_second_application_is_rejected(
        self, invitation_service: InvitationService, store: InMemoryRealtimeStore
    ):
        await invitation_service.apply("e1", "artist1", "painter@example.com")
        await invitation_service.update_status("e1", "artist1", InvitationStatus.ACCEPTED)

        with pytest.raises(AlreadyAppliedError):
            await invitation_service.apply("e1", "artist1", "painter@example.com")

        # The decision survives the duplicate attempt
        assert await store.get("invitations/e1/artist1/status") == "accepted"


class TestUpdateStatus:
    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(
        self, invitation_service: InvitationService, store: InMemoryRealtimeStore
    ):
        await invitation_service.update_status("e2", "artist9", InvitationStatus.REJECTED)

        stored = await store.get("invitations/e2/artist9")
        assert stored["status"] == "rejected"
        assert stored["email"] == "sculptor@example.com"

    @pytest.mark.asyncio
    async def test_missing_application(self, invitation_service: InvitationService):
        with pytest.raises(InvitationNotFoundError):
            await invitation_service.update_status("e1", "ghost", InvitationStatus.ACCEPTED)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [InvitationStatus.PENDING, InvitationStatus.UNKNOWN])
    async def test_only_decisions_allowed(
        self, invitation_service: InvitationService, status: InvitationStatus
    ):
        with pytest.raises(InvalidStatusError):
            await invitation_service.update_status("e2", "artist9", status)


class TestListing:
    @pytest.mark.asyncio
    async def test_newest_first_with_titles(self, invitation_service: InvitationService):
        await invitation_service.apply("e1", "artist1", "painter@example.com")

        invitations = await invitation_service.list_invitations()

        assert [(i.event_id, i.event_title) for i in invitations] == [
            ("e1", "Spring Show"),
            ("e2", "Night Market"),
        ]

    @pytest.mark.asyncio
    async def test_unknown_event_falls_back_to_id(self):
        store = InMemoryRealtimeStore({"invitations": {"e7": {"a": {"status": "pending"}}}})
        invitations = await InvitationService(store).list_invitations()
        assert invitations[0].event_title == "e7"

    @pytest.mark.asyncio
    async def test_applied_event_ids_include_any_status(
        self, invitation_service: InvitationService
    ):
        assert await invitation_service.applied_event_ids("artist9") == {"e2", "e3"}
        assert await invitation_service.applied_event_ids("nobody") == set()

"""Access control and collaborator lifecycle tests.

Uses in-memory repositories so the invariants are exercised without a database.
"""

from datetime import UTC, datetime

import pytest

from travelstory.models import CollaboratorRole, SharingStatus, StoryCollaborator, TravelStory, User
from travelstory.services import (
    AccessControl,
    AlreadyCollaboratorError,
    NotACollaboratorError,
    PermissionDeniedError,
    SelfInviteError,
    UserNotFoundError,
    authorize_owner,
    can_view,
)


# =============================================================================
# In-memory repositories
# =============================================================================


class InMemoryUsers:
    def __init__(self, *users: User):
        self.by_email = {user.email.lower(): user for user in users}

    async def get_by_email(self, email: str) -> User | None:
        return self.by_email.get(email.strip().lower())


class InMemoryStories:
    def __init__(self):
        self.saves: list[TravelStory] = []

    async def save(self, story: TravelStory) -> TravelStory:
        self.saves.append(story)
        return story


U1 = User(id=1, full_name="Ursula One", email="u1@x.com", hashed_password="-")
U2 = User(id=2, full_name="Umar Two", email="u2@x.com", hashed_password="-")
U3 = User(id=3, full_name="Una Three", email="u3@x.com", hashed_password="-")


def make_story(owner: User = U1) -> TravelStory:
    return TravelStory(
        id=100,
        user_id=owner.id,
        title="S1",
        visited_locations=["Paris"],
        image_url="http://testserver/uploads/s1.jpg",
        visit_date=datetime(2024, 1, 1, tzinfo=UTC),
        collaborators=[],
    )


def collaborator_ids(story: TravelStory) -> set[int]:
    return {c.user_id for c in story.collaborators}


@pytest.fixture
def stories() -> InMemoryStories:
    return InMemoryStories()


@pytest.fixture
def access(stories: InMemoryStories) -> AccessControl:
    return AccessControl(InMemoryUsers(U1, U2, U3), stories)


# =============================================================================
# Predicates
# =============================================================================


class TestPredicates:
    def test_authorize_owner(self) -> None:
        story = make_story()
        authorize_owner(U1.id, story)
        with pytest.raises(PermissionDeniedError):
            authorize_owner(U2.id, story)

    def test_can_view_owner_and_collaborators_only(self) -> None:
        story = make_story()
        story.collaborators.append(StoryCollaborator(user_id=U2.id, user=U2))

        assert can_view(U1.id, story)
        assert can_view(U2.id, story)
        assert not can_view(U3.id, story)

    def test_editor_role_grants_no_owner_rights(self) -> None:
        story = make_story()
        story.collaborators.append(
            StoryCollaborator(user_id=U2.id, user=U2, role=CollaboratorRole.EDITOR)
        )

        authorize_owner(U1.id, story)
        with pytest.raises(PermissionDeniedError):
            authorize_owner(U2.id, story)
        assert can_view(U2.id, story)


# =============================================================================
# Collaborator lifecycle
# =============================================================================


class TestAddCollaborator:
    @pytest.mark.asyncio
    async def test_adds_viewer_and_persists(self, access: AccessControl, stories: InMemoryStories) -> None:
        story = make_story()

        result = await access.add_collaborator(story, U1.id, "u2@x.com")

        assert result is story
        assert collaborator_ids(story) == {U2.id}
        assert story.collaborators[0].role == CollaboratorRole.VIEWER
        assert story.sharing_status == SharingStatus.SHARED
        assert stories.saves == [story]

    @pytest.mark.asyncio
    async def test_email_lookup_ignores_case(self, access: AccessControl) -> None:
        story = make_story()
        await access.add_collaborator(story, U1.id, "U2@X.COM")
        assert collaborator_ids(story) == {U2.id}

    @pytest.mark.asyncio
    async def test_duplicate_is_conflict_without_duplicating(
        self, access: AccessControl, stories: InMemoryStories
    ) -> None:
        story = make_story()
        await access.add_collaborator(story, U1.id, "u2@x.com")

        with pytest.raises(AlreadyCollaboratorError):
            await access.add_collaborator(story, U1.id, "u2@x.com")

        assert len(story.collaborators) == 1
        assert len(stories.saves) == 1

    @pytest.mark.asyncio
    async def test_self_invite_rejected(self, access: AccessControl, stories: InMemoryStories) -> None:
        story = make_story()

        with pytest.raises(SelfInviteError):
            await access.add_collaborator(story, U1.id, "u1@x.com")

        assert story.collaborators == []
        assert stories.saves == []

    @pytest.mark.asyncio
    async def test_unknown_email(self, access: AccessControl) -> None:
        story = make_story()
        with pytest.raises(UserNotFoundError):
            await access.add_collaborator(story, U1.id, "nobody@x.com")

    @pytest.mark.asyncio
    async def test_non_owner_cannot_invite(self, access: AccessControl) -> None:
        story = make_story()
        story.collaborators.append(
            StoryCollaborator(user_id=U2.id, user=U2, role=CollaboratorRole.EDITOR)
        )

        with pytest.raises(PermissionDeniedError):
            await access.add_collaborator(story, U2.id, "u3@x.com")

        assert collaborator_ids(story) == {U2.id}


class TestRemoveCollaborator:
    @pytest.mark.asyncio
    async def test_round_trip_restores_prior_set(self, access: AccessControl) -> None:
        story = make_story()
        await access.add_collaborator(story, U1.id, "u3@x.com")
        before = collaborator_ids(story)

        await access.add_collaborator(story, U1.id, "u2@x.com")
        await access.remove_collaborator(story, U1.id, "u2@x.com")

        assert collaborator_ids(story) == before

    @pytest.mark.asyncio
    async def test_last_removal_makes_story_private(self, access: AccessControl) -> None:
        story = make_story()
        await access.add_collaborator(story, U1.id, "u2@x.com")
        await access.remove_collaborator(story, U1.id, "u2@x.com")

        assert story.collaborators == []
        assert story.sharing_status == SharingStatus.PRIVATE

    @pytest.mark.asyncio
    async def test_non_collaborator_is_invalid(self, access: AccessControl, stories: InMemoryStories) -> None:
        story = make_story()
        await access.add_collaborator(story, U1.id, "u2@x.com")

        with pytest.raises(NotACollaboratorError):
            await access.remove_collaborator(story, U1.id, "u3@x.com")

        assert collaborator_ids(story) == {U2.id}
        assert len(stories.saves) == 1

    @pytest.mark.asyncio
    async def test_non_owner_cannot_revoke(self, access: AccessControl) -> None:
        story = make_story()
        await access.add_collaborator(story, U1.id, "u2@x.com")

        with pytest.raises(PermissionDeniedError):
            await access.remove_collaborator(story, U2.id, "u2@x.com")

    @pytest.mark.asyncio
    async def test_owner_never_changes(self, access: AccessControl) -> None:
        story = make_story()
        await access.add_collaborator(story, U1.id, "u2@x.com")
        await access.remove_collaborator(story, U1.id, "u2@x.com")
        assert story.user_id == U1.id

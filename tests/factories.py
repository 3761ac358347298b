"""Builders shared by the test modules."""

from unittest.mock import AsyncMock, MagicMock

from identity_store.core.containers import DocumentContainer
from identity_store.models import User


def make_user(user_id, *roles, user_name=None):
    """Create a User that is a member of ``roles``."""
    user = User(id=user_id, user_name=user_name or user_id)
    for role in roles:
        user.assign_role(role)
    return user


def make_failing_container(error):
    """Build a mock container whose every call raises ``error``."""
    container = MagicMock(spec=DocumentContainer)
    container.create_item = AsyncMock(side_effect=error)
    container.delete_item = AsyncMock(side_effect=error)
    container.read_item = AsyncMock(side_effect=error)

    feed_iterator = MagicMock()
    feed_iterator.has_more_results = True
    feed_iterator.read_next = AsyncMock(side_effect=error)
    container.query_items = MagicMock(return_value=feed_iterator)
    return container

import logging
from functools import lru_cache
from typing import Generic, List, Optional, Type, TypeVar

from identity_store.core.config import settings
from identity_store.core.containers import DocumentContainer, get_identity_container, partition_key_for
from identity_store.core.helpers.cancellation import CancellationToken, throw_if_cancelled
from identity_store.core.helpers.error_policy import ErrorPolicy
from identity_store.models import User, UserRole

logger = logging.getLogger(__name__)

TUserRole = TypeVar("TUserRole", bound=UserRole)
TUser = TypeVar("TUser", bound=User)


class UserRolesStore(Generic[TUserRole]):
    """
    Persistence store for user role associations.

    Every operation is a single round trip to the identity container (or one
    paginated query). Operations never fail because an item is missing; other
    database errors are handled by the store's ErrorPolicy.
    """

    def __init__(
            self,
            container: DocumentContainer,
            user_role_type: Type[TUserRole] = UserRole,
            suppress_errors: bool = True,
    ):
        if container is None:
            raise ValueError("container must not be None")

        self.container = container
        self.user_role_type = user_role_type
        self.error_policy = ErrorPolicy(suppress_errors)

    async def add(self, user_role: Optional[TUserRole], cancellation_token: Optional[CancellationToken] = None):
        """
        Adds the given user role to the store. A missing user role is ignored.

        Raises:
            OperationCancelledError: if the token is already cancelled.
        """
        throw_if_cancelled(cancellation_token)

        if user_role is None:
            return

        with self.error_policy.guard(f"Adding {user_role!r}"):
            await self.container.create_item(
                user_role, partition_key_for(user_role.partition_key), cancellation_token=cancellation_token
            )

    async def remove(self, user_role: Optional[TUserRole], cancellation_token: Optional[CancellationToken] = None):
        """
        Removes the given user role from the store. A missing user role is ignored.

        Raises:
            OperationCancelledError: if the token is already cancelled.
        """
        throw_if_cancelled(cancellation_token)

        if user_role is None:
            return

        with self.error_policy.guard(f"Removing {user_role!r}"):
            await self.container.delete_item(
                type(user_role), user_role.id, partition_key_for(user_role.partition_key),
                cancellation_token=cancellation_token,
            )

    async def get_role_names(
            self,
            user_id: Optional[str],
            user_type: Type[TUser] = User,
            cancellation_token: Optional[CancellationToken] = None,
    ) -> List[str]:
        """
        Retrieve the names of the roles the user with ``user_id`` is a member of.

        The user is read from the default partition of ``user_type``. An empty
        id or a missing user yields an empty list.
        """
        throw_if_cancelled(cancellation_token)

        role_names: List[str] = []
        if not user_id:
            return role_names

        with self.error_policy.guard(f"Reading role names of user {user_id}"):
            user = await self.container.read_item(
                user_type, user_id, partition_key_for(user_type.default_partition_key()),
                cancellation_token=cancellation_token,
            )
            role_names = user.role_names

        return role_names

    async def get_users(
            self,
            role_id: Optional[str],
            user_type: Type[TUser] = User,
            cancellation_token: Optional[CancellationToken] = None,
    ) -> List[TUser]:
        """
        Retrieve the users that belong to the role with ``role_id``.

        Membership is a substring match on the flattened role ids, so a role id
        that is a prefix of another ("r1" and "r10") also matches the users of
        the longer one. Only the default partition of ``user_type`` is searched.
        """
        throw_if_cancelled(cancellation_token)

        users: List[TUser] = []
        if not role_id:
            return users

        with self.error_policy.guard(f"Reading users of role {role_id}"):
            feed_iterator = self.container.query_items(
                user_type,
                filters={
                    "flatten_role_ids__ne": "",
                    "flatten_role_ids__contains": role_id,
                },
                partition_key=partition_key_for(user_type.default_partition_key()),
                cancellation_token=cancellation_token,
            )

            found: List[TUser] = []
            while feed_iterator.has_more_results:
                found.extend(await feed_iterator.read_next())
            users = found

        return users

    async def find(
            self,
            user_id: Optional[str],
            role_id: Optional[str],
            cancellation_token: Optional[CancellationToken] = None,
    ) -> Optional[TUserRole]:
        """
        Retrieve the user role for ``user_id`` and ``role_id`` if it exists.

        Only the default partition of the user role type is searched.
        """
        throw_if_cancelled(cancellation_token)

        user_role: Optional[TUserRole] = None

        with self.error_policy.guard(f"Finding user role of user {user_id} in role {role_id}"):
            feed_iterator = self.container.query_items(
                self.user_role_type,
                filters={"user_id": user_id, "role_id": role_id},
                partition_key=partition_key_for(self.user_role_type.default_partition_key()),
                cancellation_token=cancellation_token,
            )

            while feed_iterator.has_more_results:
                page = await feed_iterator.read_next()
                if page:
                    # Should only be one.
                    user_role = page[0]
                    break

        return user_role


@lru_cache()
def get_user_roles_store() -> UserRolesStore:
    return UserRolesStore(
        container=get_identity_container(),
        suppress_errors=settings.ROLE_STORE_SUPPRESS_ERRORS
    )

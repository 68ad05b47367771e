from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List

from ..exceptions import ErrorCode, FieldError, ValidationError
from ..models_admin import Group, Permission, UserAccount
from ..resources import GROUPS, PERMISSIONS, USERS, ResourceDescriptor
from .resource_client import ResourceClient, decode_rows

VALIDATE_INVITE_PATH = "/api/v1/users/validate-invite/"
ACTIVATE_INVITE_PATH = "/api/v1/users/activate-invite/"
MIN_PASSWORD_LENGTH = 8


@dataclass
class UsersClient(ResourceClient):
    descriptor: ResourceDescriptor = USERS

    def set_groups(self, user_id: int | str, group_ids: Iterable[int]) -> UserAccount:
        return self.update(user_id, {"group_ids": list(group_ids)})

    def set_active(self, user_id: int | str, active: bool) -> UserAccount:
        return self.update(user_id, {"is_active": active})

    def validate_invite(self, token: str) -> Any:
        """Check an invitation token; an expired or unknown token raises the mapped ``ApiError``."""
        return self._request("POST", VALIDATE_INVITE_PATH, json_body={"token": token}, operation="validate_invite")

    def activate_invite(self, token: str, password: str, confirm_password: str | None = None) -> Any:
        problems = []
        if len(password) < MIN_PASSWORD_LENGTH:
            problems.append(FieldError("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"))
        if confirm_password is not None and confirm_password != password:
            problems.append(FieldError("confirm_password", "Passwords do not match"))
        if problems:
            raise ValidationError(
                code=ErrorCode.VALIDATION_ERROR.value,
                message=problems[0].message,
                status_code=0,
                field_errors=problems,
            )
        result = self._request(
            "POST",
            ACTIVATE_INVITE_PATH,
            json_body={"token": token, "password": password},
            operation="activate_invite",
        )
        self.invalidate()
        return result


@dataclass
class GroupsClient(ResourceClient):
    """Permission groups; user rows embed their groups, so writes also invalidate users."""

    descriptor: ResourceDescriptor = GROUPS

    def list_groups(self) -> List[Group]:
        return self.list_all()

    def create_group(self, name: str) -> Group:
        return self.create({"name": name})

    def rename(self, group_id: int | str, name: str) -> Group:
        return self.update(group_id, {"name": name})

    def set_permissions(self, group_id: int | str, permission_ids: Iterable[int]) -> Group:
        return self.update(group_id, {"permission_ids": list(permission_ids)})

    def permissions(self) -> List[Permission]:
        payload = self._request("GET", PERMISSIONS.path, operation="permissions")
        return decode_rows(payload, Permission, resource=PERMISSIONS.name)

    def invalidate(self) -> None:
        super().invalidate()
        if self.cache is not None:
            self.cache.invalidate(USERS.name)

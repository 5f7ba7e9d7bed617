"""Workspace domain service."""

from ledgerlens.database.base import Database
from ledgerlens.domain.entities import Workspace
from ledgerlens.domain.errors import ValidationError, WorkspaceNotFoundError, workspace_not_found


class WorkspaceService:
    """Service for managing workspaces."""

    def __init__(self, db: Database):
        self.db = db

    def create_workspace(self, name: str) -> int:
        """Create a workspace.

        Raises:
            ValidationError: If the name is empty
        """
        name = name.strip()
        if not name:
            raise ValidationError("Workspace name must not be empty")
        return self.db.create_workspace(name)

    def get_workspace(self, workspace_id: int) -> Workspace:
        """Get a workspace.

        Raises:
            WorkspaceNotFoundError: If it doesn't exist
        """
        workspace = self.db.get_workspace(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_not_found(workspace_id))
        return workspace

    def list_workspaces(self) -> list[Workspace]:
        return self.db.list_workspaces()

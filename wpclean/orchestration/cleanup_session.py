"""Interactive cleanup session state.

CleanupSession turns operator intents into calls on FileOperations and
BackupCatalog and keeps track of what the operator is looking at. The view
is one of two states:

- FolderView(index): the list of visible backup folders, ``index`` selects
  a folder.
- FileView(folder, index): the visible archives of one folder, ``index``
  selects an archive.

Selections are indices into visible lists, so they are clamped against a
freshly filtered list after every deletion.
"""

from dataclasses import dataclass
from typing import List, Optional, Union

from wpclean.catalog import BackupCatalog
from wpclean.models import (
    BackupFolder,
    DeletionResult,
    FileEntry,
    FolderDeletionResult,
    Intent,
    ViewMode,
)
from wpclean.operations import FileOperations


@dataclass
class FolderView:
    """Folder list state."""
    index: int = 0

    @property
    def mode(self) -> ViewMode:
        return ViewMode.FOLDERS


@dataclass
class FileView:
    """Archive list state for one backup folder."""
    folder: BackupFolder
    index: int = 0

    @property
    def mode(self) -> ViewMode:
        return ViewMode.FILES


ViewState = Union[FolderView, FileView]


def _clamp(index: int, length: int) -> int:
    return max(0, min(index, length - 1))


class CleanupSession:
    """Owns the view state and dispatches operator intents.

    Attributes:
        catalog: BackupCatalog with the scan results.
        operations: FileOperations used for every deletion.
        state: Current FolderView or FileView.
        last_result: Outcome of the most recent delete, for status display.
    """

    def __init__(self, catalog: BackupCatalog, operations: FileOperations) -> None:
        self.catalog = catalog
        self.operations = operations
        self.state: ViewState = FolderView()
        self.last_result: Optional[Union[DeletionResult, FolderDeletionResult]] = None

    @property
    def mode(self) -> ViewMode:
        return self.state.mode

    def visible_folders(self) -> List[BackupFolder]:
        return self.catalog.visible_folders()

    def visible_files(self) -> List[FileEntry]:
        """Visible archives of the open folder, or an empty list in folder view."""
        if isinstance(self.state, FileView):
            return self.catalog.visible_files(self.state.folder)
        return []

    def selected_folder(self) -> Optional[BackupFolder]:
        """Folder under the cursor (folder view) or the open folder (file view)."""
        if isinstance(self.state, FileView):
            return self.state.folder
        folders = self.visible_folders()
        if not folders:
            return None
        return folders[_clamp(self.state.index, len(folders))]

    def selected_file(self) -> Optional[FileEntry]:
        """Archive under the cursor in file view."""
        files = self.visible_files()
        if not files:
            return None
        return files[_clamp(self.state.index, len(files))]

    def handle(self, intent: Intent) -> bool:
        """Apply one operator intent.

        Args:
            intent: Decoded operator action.

        Returns:
            False when the session should end, True otherwise.
        """
        if intent is Intent.QUIT:
            return False

        self.last_result = None
        if intent is Intent.UP:
            self.move_up()
        elif intent is Intent.DOWN:
            self.move_down()
        elif intent is Intent.OPEN:
            self.open_selected()
        elif intent is Intent.BACK:
            self.go_back()
        elif intent is Intent.DELETE:
            self.delete_selected()

        return True

    def move_up(self) -> None:
        if self.state.index > 0:
            self.state.index -= 1

    def move_down(self) -> None:
        if self.state.index < self._current_length() - 1:
            self.state.index += 1

    def open_selected(self) -> None:
        """Enter the selected folder; ignored in file view or with no folders."""
        if isinstance(self.state, FileView):
            return
        folder = self.selected_folder()
        if folder is not None:
            self.state = FileView(folder=folder)

    def go_back(self) -> None:
        """Return to the folder list with the open folder selected."""
        if not isinstance(self.state, FileView):
            return
        self.state = FolderView(index=self._folder_position(self.state.folder))

    def delete_selected(self) -> None:
        """Delete the selected folder (folder view) or archive (file view)."""
        if isinstance(self.state, FileView):
            self._delete_selected_file()
        else:
            self._delete_selected_folder()

    def _delete_selected_folder(self) -> None:
        folder = self.selected_folder()
        if folder is None:
            return

        self.last_result = self.operations.delete_folder(folder)
        self.state.index = _clamp(self.state.index, len(self.visible_folders()))

    def _delete_selected_file(self) -> None:
        entry = self.selected_file()
        if entry is None:
            return

        result = self.operations.delete_file(entry)
        self.last_result = result
        if not result.success:
            return

        remaining = self.visible_files()
        if remaining:
            self.state.index = _clamp(self.state.index, len(remaining))
            return

        # Folder emptied: fall back to the folder list
        self.state = FolderView(index=self._folder_position(self.state.folder))

    def _folder_position(self, folder: BackupFolder) -> int:
        """Index of ``folder`` among visible folders, clamped when it is gone."""
        position = 0
        for candidate in self.catalog.folders:
            if candidate is folder:
                break
            if not candidate.deleted:
                position += 1
        return _clamp(position, len(self.visible_folders()))

    def _current_length(self) -> int:
        if isinstance(self.state, FileView):
            return len(self.visible_files())
        return len(self.visible_folders())

import shutil
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from roo_init.constants import ROO_DIRNAME, ROOMODES_FILENAME, RULES_DIRNAME
from roo_init.errors import FileSystemError, OverwriteConflictError
from roo_init.interfaces import IDisplay
from roo_init.models import ModeDefinition, Origin
from roo_init.utils import display_path, write_json


@dataclass
class CopyTally:
    copied: int = 0
    skipped: list[Path] = field(default_factory=list)

    def add(self, other: "CopyTally") -> None:
        self.copied += other.copied
        self.skipped.extend(other.skipped)


@dataclass
class MaterializeResult:
    descriptor_path: Path
    descriptor_written: bool
    mode_count: int
    rules: CopyTally = field(default_factory=CopyTally)

    @property
    def skipped(self) -> list[Path]:
        if self.descriptor_written:
            return list(self.rules.skipped)
        return [self.descriptor_path, *self.rules.skipped]


def rules_target_dir(target_root: Path) -> Path:
    return target_root / ROO_DIRNAME / RULES_DIRNAME


class FileMaterializer:
    def __init__(self, ui: IDisplay, cwd: Optional[Path] = None) -> None:
        self.ui = ui
        self.cwd = cwd

    def ensure_directory(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise self._fs_error(
                f"Failed to create directory {self._show(path)}: {exc}",
                destination=path,
            ) from exc

    def copy_file(self, source: Path, destination: Path, force: bool) -> None:
        if destination.exists() and not force:
            raise OverwriteConflictError(destination)
        self.ensure_directory(destination.parent)
        try:
            shutil.copyfile(source, destination)
        except OSError as exc:
            raise self._fs_error(
                f"Failed to copy {self._show(source)} "
                f"to {self._show(destination)}: {exc}",
                source=source,
                destination=destination,
            ) from exc

    def write_descriptor_file(
        self, target_root: Path, modes: list[ModeDefinition], force: bool
    ) -> Path:
        path = target_root / ROOMODES_FILENAME
        if path.exists() and not force:
            raise OverwriteConflictError(path)
        payload = {"customModes": [mode.as_roomodes_entry() for mode in modes]}
        try:
            write_json(path, payload)
        except OSError as exc:
            raise self._fs_error(
                f"Failed to write {self._show(path)}: {exc}", destination=path
            ) from exc
        self.ui.success(
            f"{ROOMODES_FILENAME} configured with {len(modes)} mode(s): "
            f"{self._show(path)}",
            title="configuration saved",
        )
        return path

    def materialize_rules_for_mode(
        self,
        target_root: Path,
        mode: ModeDefinition,
        rules_root: Path,
        force: bool,
    ) -> CopyTally:
        mode_dir = rules_target_dir(target_root) / mode.slug
        self.ensure_directory(mode_dir)

        tally = CopyTally()
        for rule in mode.associated_rule_files:
            source = rule.resolve_source(rules_root)
            destination = mode_dir / Path(rule.source_path).name
            self._copy_counted(source, destination, force, tally)
        return tally

    def copy_directory(
        self, source_dir: Path, destination_dir: Path, force: bool
    ) -> CopyTally:
        tally = CopyTally()
        queue: deque[tuple[Path, Path]] = deque([(source_dir, destination_dir)])
        while queue:
            source, destination = queue.popleft()
            self.ensure_directory(destination)
            try:
                entries = sorted(source.iterdir())
            except OSError as exc:
                raise self._fs_error(
                    f"Failed to read directory {self._show(source)}: {exc}",
                    source=source,
                ) from exc
            for entry in entries:
                target = destination / entry.name
                if entry.is_dir():
                    queue.append((entry, target))
                elif entry.is_file():
                    self._copy_counted(entry, target, force, tally)
        return tally

    def materialize(
        self,
        target_root: Path,
        modes: list[ModeDefinition],
        rules_root_for: Callable[[Origin], Path],
        force: bool,
        generic_rules_dir: Optional[Path] = None,
    ) -> MaterializeResult:
        result = MaterializeResult(
            descriptor_path=target_root / ROOMODES_FILENAME,
            descriptor_written=False,
            mode_count=len(modes),
        )
        try:
            self.write_descriptor_file(target_root, modes, force)
            result.descriptor_written = True
        except OverwriteConflictError as exc:
            self._warn_conflict(exc)

        if not modes:
            return result

        if generic_rules_dir is not None and generic_rules_dir.is_dir():
            result.rules.add(
                self.copy_directory(
                    generic_rules_dir, rules_target_dir(target_root), force
                )
            )

        for mode in modes:
            result.rules.add(
                self.materialize_rules_for_mode(
                    target_root, mode, rules_root_for(mode.origin), force
                )
            )
        return result

    def _copy_counted(
        self, source: Path, destination: Path, force: bool, tally: CopyTally
    ) -> None:
        try:
            self.copy_file(source, destination, force)
        except OverwriteConflictError as exc:
            self._warn_conflict(exc)
            tally.skipped.append(destination)
            return
        tally.copied += 1

    def _warn_conflict(self, exc: OverwriteConflictError) -> None:
        self.ui.warning(
            f"File already exists, skipping: {self._show(exc.path)}. "
            "Use --force to overwrite.",
            title="overwrite conflict",
        )

    def _fs_error(
        self,
        message: str,
        source: Optional[Path] = None,
        destination: Optional[Path] = None,
    ) -> FileSystemError:
        error = FileSystemError(message, source=source, destination=destination)
        details = [message]
        if source is not None:
            details.append(f"Source: {self._show(source)}")
        if destination is not None:
            details.append(f"Destination: {self._show(destination)}")
        self.ui.error("\n".join(details), title="file system error")
        return error

    def _show(self, path: Path) -> str:
        return display_path(path, self.cwd)

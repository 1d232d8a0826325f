"""Filesystem handlers, one per capability flag.

Every handler takes the resolved path and the line's operation record,
ignores the fields it does not need, and returns an ActionResult when it
acted or failed, or None when it is disabled or had nothing to do.
Filesystem failures are logged as warnings and never raised, so the
remaining handlers of a rule still run.
"""

import errno
import fcntl
import grp
import logging
import os
import pwd
import struct
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from pawprint.filesystem import probe
from pawprint.filesystem.exclusions import ExclusionRegistry
from pawprint.filesystem.walker import WalkEntry, walk
from pawprint.models.result import ActionResult
from pawprint.models.run import RunConfig
from pawprint.rules.age import AGE_INVALID, parse_age
from pawprint.rules.attributes import Flag
from pawprint.rules.parser import OperationRecord, is_unset

logger = logging.getLogger(__name__)

DIRECTORY_MODE = 0o755
FILE_MODE = 0o644

# ioctl requests for the inode flag word (linux/fs.h, 64-bit).
FS_IOC_GETFLAGS = 0x80086601
FS_IOC_SETFLAGS = 0x40086602

# chattr(1) letters and their inode flag bits.
ATTRIBUTE_FLAGS: dict[str, int] = {
    "s": 0x00000001,  # secure deletion
    "u": 0x00000002,  # undeletable
    "c": 0x00000004,  # compressed
    "S": 0x00000008,  # synchronous updates
    "i": 0x00000010,  # immutable
    "a": 0x00000020,  # append only
    "d": 0x00000040,  # no dump
    "A": 0x00000080,  # no atime updates
    "j": 0x00004000,  # data journaling
    "t": 0x00008000,  # no tail merging
    "D": 0x00010000,  # synchronous directory updates
    "T": 0x00020000,  # top of directory hierarchy
    "e": 0x00080000,  # extents
    "C": 0x00800000,  # no copy on write
    "P": 0x20000000,  # project hierarchy
}


@dataclass(slots=True)
class _Sweep:
    """Counters for a clean or remove pass over a directory tree."""

    removed: int = 0
    kept: int = 0
    errors: list[str] = field(default_factory=list)

    def summary(self, verb: str) -> str:
        entries = "entry" if self.removed == 1 else "entries"
        text = f"{verb} {self.removed} {entries}"
        if self.kept:
            text += f", kept {self.kept} non-empty"
        return text


def _write_all(fd: int, data: bytes) -> None:
    """Write data completely, looping over partial writes."""
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        if written <= 0:
            raise OSError(errno.EIO, "short write")
        view = view[written:]


class Handlers:
    """Operations bound to capability flags.

    Attributes:
        _config: Execution modes that gate handler families.
        _exclusions: Registry consulted before cleaning and extended by
            exclusion rules.
        _clock: Source of the current time for age deadlines.
    """

    def __init__(
        self,
        config: RunConfig,
        exclusions: ExclusionRegistry | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._exclusions = exclusions if exclusions is not None else ExclusionRegistry()
        self._clock = clock

    @property
    def config(self) -> RunConfig:
        """Execution modes this handler set was built with."""
        return self._config

    @property
    def exclusions(self) -> ExclusionRegistry:
        """Exclusion registry shared with the run."""
        return self._exclusions

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_file(self, path: str, record: OperationRecord) -> ActionResult | None:
        """Create an empty regular file if nothing exists at path.

        Never truncates an existing file.
        """
        if not self._config.create or probe.path_exists(path):
            return None
        if self._config.dry_run:
            return self._simulated(path, Flag.CREATE, "create file")

        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL | os.O_CLOEXEC, FILE_MODE)
        except FileExistsError:
            return None
        except OSError as e:
            return self._warn(path, Flag.CREATE, "Cannot create file", e)
        os.close(fd)

        logger.info("Created file %s", path)
        return ActionResult(path=path, action=Flag.CREATE, success=True, message="created file")

    def create_dir(self, path: str, record: OperationRecord) -> ActionResult | None:
        """Create a directory with mode 0755 if nothing exists at path.

        Missing parent directories are created as well.
        """
        if not self._config.create or probe.path_exists(path):
            return None
        if self._config.dry_run:
            return self._simulated(path, Flag.CREATE_DIRECTORY, "create directory")

        try:
            os.makedirs(path, mode=DIRECTORY_MODE)
            # makedirs is subject to the umask; the leaf must be exactly 0755.
            os.chmod(path, DIRECTORY_MODE)
        except OSError as e:
            return self._warn(path, Flag.CREATE_DIRECTORY, "Cannot create directory", e)

        logger.info("Created directory %s", path)
        return ActionResult(
            path=path,
            action=Flag.CREATE_DIRECTORY,
            success=True,
            message="created directory",
        )

    def write_content(self, path: str, record: OperationRecord) -> ActionResult | None:
        """Write the rule argument into an existing file.

        The file is truncated first unless the append modifier is set.
        Targets that are missing or not regular files (directories, FIFOs,
        devices) are left alone.
        """
        if not self._config.create or not record.argument:
            return None
        if not probe.is_regular_file(path):
            logger.debug("Not writing to %s: no such regular file", path)
            return None

        append = Flag.APPEND in record.flags
        verb = "append to" if append else "write"
        if self._config.dry_run:
            return self._simulated(path, Flag.WRITE, f"{verb} file")

        flags = os.O_WRONLY | os.O_CLOEXEC | (os.O_APPEND if append else os.O_TRUNC)
        try:
            fd = os.open(path, flags)
        except OSError as e:
            return self._warn(path, Flag.WRITE, "Cannot open file", e)

        data = os.fsencode(record.argument)
        try:
            _write_all(fd, data)
        except OSError as e:
            return self._warn(path, Flag.WRITE, "Cannot write to file", e)
        finally:
            os.close(fd)

        return ActionResult(
            path=path,
            action=Flag.WRITE,
            success=True,
            message=f"wrote {len(data)} bytes",
        )

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def set_owner(self, path: str, record: OperationRecord) -> ActionResult | None:
        """Change the owning user and/or group of path.

        Each half is resolved independently; an unset or unknown half is
        left unchanged.
        """
        if is_unset(record.user) and is_unset(record.group):
            return None
        if not probe.path_exists(path):
            logger.debug("Not changing owner of %s: no such file", path)
            return None

        errors: list[str] = []
        uid = self._resolve_id(record.user, "user", errors)
        gid = self._resolve_id(record.group, "group", errors)
        for error in errors:
            logger.warning("%s for %s", error, path)

        if uid == -1 and gid == -1:
            return ActionResult(
                path=path,
                action=Flag.OWNERSHIP,
                success=False,
                error="; ".join(errors),
            )

        owner = f"{'-' if uid == -1 else uid}:{'-' if gid == -1 else gid}"
        if self._config.dry_run:
            return self._simulated(path, Flag.OWNERSHIP, f"change owner to {owner}")

        try:
            os.chown(path, uid, gid)
        except OSError as e:
            return self._warn(path, Flag.OWNERSHIP, "Cannot change owner of", e)

        return ActionResult(
            path=path,
            action=Flag.OWNERSHIP,
            success=not errors,
            message=f"owner set to {owner}",
            error="; ".join(errors) or None,
        )

    def set_perm(self, path: str, record: OperationRecord) -> ActionResult | None:
        """Apply the octal permission bits from the mode field."""
        if is_unset(record.mode):
            return None
        if not probe.path_exists(path):
            logger.debug("Not changing mode of %s: no such file", path)
            return None

        try:
            mode = int(record.mode, 8)
        except ValueError:
            mode = -1
        if not 0 <= mode <= 0o7777:
            logger.warning("Invalid mode %r for %s", record.mode, path)
            return ActionResult(
                path=path,
                action=Flag.PERMISSION,
                success=False,
                error=f"invalid mode {record.mode!r}",
            )

        if self._config.dry_run:
            return self._simulated(path, Flag.PERMISSION, f"set mode {mode:04o}")

        try:
            os.chmod(path, mode)
        except OSError as e:
            return self._warn(path, Flag.PERMISSION, "Cannot change mode of", e)

        return ActionResult(
            path=path,
            action=Flag.PERMISSION,
            success=True,
            message=f"mode set to {mode:04o}",
        )

    def set_attrs(self, path: str, record: OperationRecord) -> ActionResult | None:
        """Set or clear inode attribute flags, as chattr(1) does.

        The argument is ``+`` or ``-`` followed by attribute letters.
        """
        argument = record.argument.strip()
        operation = argument[:1]
        if operation not in ("+", "-"):
            logger.warning("Invalid attribute operation %r for %s", argument, path)
            return ActionResult(
                path=path,
                action=Flag.ATTRIBUTES,
                success=False,
                error=f"invalid attribute operation {argument!r}",
            )

        mask = 0
        for char in argument[1:]:
            bit = ATTRIBUTE_FLAGS.get(char)
            if bit is None:
                logger.warning("Unknown attribute %r for %s", char, path)
                continue
            mask |= bit
        if not mask:
            return None

        if self._config.dry_run:
            return self._simulated(path, Flag.ATTRIBUTES, f"apply attributes {argument}")

        try:
            fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK | os.O_NOFOLLOW | os.O_CLOEXEC)
        except OSError as e:
            return self._warn(path, Flag.ATTRIBUTES, "Cannot open", e)

        try:
            raw = fcntl.ioctl(fd, FS_IOC_GETFLAGS, struct.pack("i", 0))
            current = struct.unpack("i", raw)[0]
            updated = current | mask if operation == "+" else current & ~mask
            if updated != current:
                fcntl.ioctl(fd, FS_IOC_SETFLAGS, struct.pack("i", updated))
        except OSError as e:
            return self._warn(path, Flag.ATTRIBUTES, "Cannot set attributes on", e)
        finally:
            os.close(fd)

        return ActionResult(
            path=path,
            action=Flag.ATTRIBUTES,
            success=True,
            message=f"attributes {argument}",
        )

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def clean(self, path: str, record: OperationRecord) -> ActionResult | None:
        """Delete entries below path that are older than the rule's age.

        Entries matching a registered exclusion are kept. In force-clean
        mode every entry is deleted regardless of age.
        """
        if not self._config.clean:
            return None
        if not probe.is_directory(path, follow_symlinks=True):
            return None

        force = self._config.force_clean
        age = parse_age(record.age)
        if age is None and not force:
            return None
        if age == AGE_INVALID:
            logger.warning("Invalid age %r for %s, treating entries as due", record.age, path)
            age = 0.0
        deadline = self._clock() - (age or 0.0)

        sweep = _Sweep()

        def visit(entry: WalkEntry) -> None:
            if self._exclusions.is_excluded(entry.path):
                logger.debug("Keeping excluded %s", entry.path)
                return
            if not force and probe.latest_timestamp(entry.stat) >= deadline:
                return
            self._delete_entry(entry, sweep)

        walk(path, visit, recursive=True)
        return self._sweep_result(path, Flag.CLEAN, sweep, "cleaned")

    def remove(self, path: str, record: OperationRecord) -> ActionResult | None:
        """Delete path, or everything below it when it is a directory.

        Removal is unconditional: exclusions and ages are ignored and hidden
        entries are included. A directory is kept itself when the same rule
        also creates it.
        """
        if not self._config.remove or not probe.path_exists(path):
            return None

        sweep = _Sweep()
        is_dir = probe.is_directory(path)
        if is_dir:
            walk(path, lambda entry: self._delete_entry(entry, sweep), include_hidden=True)
            if Flag.CREATE_DIRECTORY in record.flags:
                return self._sweep_result(path, Flag.REMOVE, sweep, "emptied")

        try:
            st = os.lstat(path)
        except OSError as e:
            return self._warn(path, Flag.REMOVE, "Cannot stat", e)
        self._delete_entry(WalkEntry(path=path, is_dir=is_dir, stat=st), sweep)
        return self._sweep_result(path, Flag.REMOVE, sweep, "removed")

    # ------------------------------------------------------------------
    # Exclusion
    # ------------------------------------------------------------------

    def register_exclusion(self, path: str, record: OperationRecord) -> ActionResult:
        """Protect path (a literal path or glob) from cleaning."""
        self._exclusions.register(path)
        logger.debug("Excluding %s from cleanup", path)
        return ActionResult(
            path=path,
            action=Flag.EXCLUDE,
            success=True,
            message="excluded from cleanup",
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _delete_entry(self, entry: WalkEntry, sweep: _Sweep) -> None:
        if self._config.dry_run:
            logger.info("Dry-run: would remove %s", entry.path)
            sweep.removed += 1
            return

        try:
            if entry.is_dir:
                os.rmdir(entry.path)
            else:
                os.unlink(entry.path)
        except OSError as e:
            if entry.is_dir and e.errno in (errno.ENOTEMPTY, errno.EEXIST):
                logger.warning("Cannot remove non-empty directory %s", entry.path)
                sweep.kept += 1
                return
            logger.warning("Cannot remove %s: %s", entry.path, e)
            sweep.errors.append(f"{entry.path}: {e.strerror or e}")
            return

        logger.info("Removed %s", entry.path)
        sweep.removed += 1

    def _sweep_result(
        self, path: str, action: Flag, sweep: _Sweep, verb: str
    ) -> ActionResult | None:
        if not sweep.removed and not sweep.kept and not sweep.errors:
            return None
        return ActionResult(
            path=path,
            action=action,
            success=not sweep.errors,
            message=sweep.summary(verb),
            error="; ".join(sweep.errors) or None,
            dry_run=self._config.dry_run,
        )

    @staticmethod
    def _resolve_id(name: str, kind: str, errors: list[str]) -> int:
        """Resolve a user or group name to a numeric id, -1 if unset or unknown."""
        if is_unset(name):
            return -1
        if name.isdigit():
            return int(name)
        try:
            if kind == "user":
                return pwd.getpwnam(name).pw_uid
            return grp.getgrnam(name).gr_gid
        except KeyError:
            errors.append(f"Unknown {kind} {name!r}")
            return -1

    @staticmethod
    def _warn(path: str, action: Flag, message: str, error: OSError) -> ActionResult:
        logger.warning("%s %s: %s", message, path, error)
        return ActionResult(path=path, action=action, success=False, error=str(error))

    @staticmethod
    def _simulated(path: str, action: Flag, description: str) -> ActionResult:
        logger.info("Dry-run: would %s %s", description, path)
        return ActionResult(
            path=path,
            action=action,
            success=True,
            message=f"would {description}",
            dry_run=True,
        )

"""A small virtual file system: nodes, mounts and a table of open handles."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Callable, Optional

from kernsim.strings import names_match, tokenize

FILE_NAME_MAX = 32
PATH_MAX = 256
MAX_OPEN_FILES = 64
MAX_MOUNTS = 4

_TYPE_MASK = 0x07


class FsError(OSError):
    """Raised when a file-system operation cannot be carried out."""


class FsFlag(IntEnum):
    """Node types kept in the low bits of a node's flags."""

    FILE = 0x01
    DIRECTORY = 0x02
    CHARDEVICE = 0x03
    BLOCKDEVICE = 0x04
    PIPE = 0x05
    SYMLINK = 0x06
    MOUNTPOINT = 0x07


class FileMode(IntFlag):
    """Flags given when opening a file."""

    CREAT = 0b00000001
    APPEND = 0b00000010
    RDONLY = 0b00000100
    WRONLY = 0b00001000


@dataclass(frozen=True)
class DirEnt:
    """One entry returned when listing a directory."""

    name: str
    inode: int


ReadHandler = Callable[["FsNode", int, int], bytes]
WriteHandler = Callable[["FsNode", int, bytes], int]


@dataclass(eq=False)
class FsNode:
    """A file-system node.

    Reading and writing go through the optional ``reader`` and ``writer``
    handlers; subclasses may instead override the operations they support.
    """

    name: str
    flags: int = FsFlag.FILE
    inode: int = 0
    length: int = 0
    start_sector: int = 0
    ref: FsNode | None = None
    reader: Optional[ReadHandler] = field(default=None, repr=False)
    writer: Optional[WriteHandler] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if len(self.name) >= FILE_NAME_MAX:
            raise ValueError(f"node name {self.name!r} is longer than {FILE_NAME_MAX - 1} characters")

    def read(self, offset: int, size: int) -> bytes:
        """Read up to ``size`` bytes from ``offset``; nothing without a reader."""
        if self.reader is None:
            return b""
        return bytes(self.reader(self, offset, size))

    def write(self, offset: int, data: bytes) -> int:
        """Write ``data`` at ``offset`` and return the count taken; nothing without a writer."""
        if self.writer is None:
            return 0
        return self.writer(self, offset, bytes(data))

    def close(self) -> int:
        return 0

    def readdir(self, index: int) -> DirEnt | None:
        """The entry at ``index``, or None when there is none."""
        return None

    def finddir(self, name: str) -> FsNode | None:
        """The child called ``name``, or None when there is none."""
        return None

    def is_directory(self) -> bool:
        return (self.flags & _TYPE_MASK) == FsFlag.DIRECTORY


@dataclass(eq=False)
class FsMount:
    """A node grafted under ``parent`` by ``name``."""

    name: str
    parent: FsNode
    child: FsNode


@dataclass
class _OpenFile:
    node: FsNode
    readable: bool
    writable: bool
    offset: int = field(default=0)


class FileSystem:
    """A rooted tree of nodes with mount points and numbered file handles."""

    def __init__(self, root: FsNode) -> None:
        self.root = root
        self.mounts: list[FsMount] = []
        self._open: list[_OpenFile | None] = [None] * MAX_OPEN_FILES

    def mount(self, name: str, parent: FsNode, child: FsNode) -> None:
        """Make ``child`` reachable as ``name`` inside ``parent``."""
        if len(self.mounts) >= MAX_MOUNTS:
            raise FsError(f"mount table is full ({MAX_MOUNTS} entries)")
        if len(name) >= FILE_NAME_MAX:
            raise ValueError(f"mount name {name!r} is longer than {FILE_NAME_MAX - 1} characters")
        self.mounts.append(FsMount(name, parent, child))

    def _step(self, node: FsNode, token: str) -> FsNode | None:
        for mount in self.mounts:
            if mount.parent is node and names_match(token, mount.name):
                return mount.child
        return node.finddir(token) if node.is_directory() else None

    def get_dir(self, name: str) -> FsNode | None:
        """Resolve a slash-separated path from the root, or None if it leads nowhere."""
        if len(name) >= PATH_MAX:
            raise FsError(f"path is longer than {PATH_MAX - 1} characters")
        node: FsNode | None = self.root
        for token in tokenize(name, "/"):
            if node is None:
                break
            node = self._step(node, token)
        return node

    def open(self, name: str, mode: FileMode) -> int:
        """Open the node at ``name`` and return the lowest free handle."""
        node = self.get_dir(name)
        if node is None:
            raise FsError(f"no such file: {name!r}")
        for fh, slot in enumerate(self._open):
            if slot is None:
                self._open[fh] = _OpenFile(
                    node,
                    readable=not mode & FileMode.WRONLY,
                    writable=not mode & FileMode.RDONLY,
                )
                return fh
        raise FsError(f"too many open files ({MAX_OPEN_FILES})")

    def _handle(self, fh: int) -> _OpenFile:
        slot = self._open[fh] if 0 <= fh < MAX_OPEN_FILES else None
        if slot is None:
            raise FsError(f"bad file handle {fh}")
        return slot

    def node(self, fh: int) -> FsNode:
        """The node behind an open handle."""
        return self._handle(fh).node

    def close(self, fh: int) -> None:
        self._handle(fh)
        self._open[fh] = None

    def seek(self, fh: int, location: int) -> None:
        if location < 0:
            raise ValueError("cannot seek to a negative position")
        self._handle(fh).offset = location

    def read(self, fh: int, size: int) -> bytes:
        """Read from the handle's position; a write-only handle reads nothing."""
        handle = self._handle(fh)
        if not handle.readable:
            return b""
        return handle.node.read(handle.offset, size)

    def write(self, fh: int, data: bytes) -> int:
        """Write at the handle's position; a read-only handle writes nothing."""
        handle = self._handle(fh)
        if not handle.writable:
            return 0
        return handle.node.write(handle.offset, bytes(data))
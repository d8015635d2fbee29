"""The device file system mounted as the root at boot."""

from __future__ import annotations

from kernsim.fs import DirEnt, FsError, FsFlag, FsNode
from kernsim.strings import names_match
from kernsim.vga import VgaText

MAX_FILES = 16


class StdoutNode(FsNode):
    """A write-only device that puts bytes on the screen."""

    def __init__(self, screen: VgaText, inode: int = 0) -> None:
        super().__init__("stdout", FsFlag.FILE, inode=inode, length=1)
        self.screen = screen

    def write(self, offset: int, data: bytes) -> int:
        """Show the bytes of ``data`` from ``offset`` on; reports the whole length."""
        for byte in data[offset:]:
            self.screen.putc(chr(byte))
        return len(data)


class DevFsRoot(FsNode):
    """The ``dev`` directory holding the device nodes."""

    def __init__(self, screen: VgaText) -> None:
        super().__init__("dev", FsFlag.DIRECTORY)
        self.children: list[FsNode] = []
        self._add(StdoutNode(screen, inode=len(self.children)))

    def _add(self, node: FsNode) -> None:
        if len(self.children) >= MAX_FILES:
            raise FsError(f"device directory is full ({MAX_FILES} entries)")
        self.children.append(node)

    def readdir(self, index: int) -> DirEnt | None:
        """The entry at ``index``; entries are numbered from 1."""
        if not 1 <= index <= len(self.children):
            return None
        child = self.children[index - 1]
        return DirEnt(child.name, child.inode)

    def finddir(self, name: str) -> FsNode | None:
        for child in self.children:
            if names_match(name, child.name):
                return child
        return None


def create_devfs(screen: VgaText) -> DevFsRoot:
    """Build the device directory with its devices bound to ``screen``."""
    return DevFsRoot(screen)
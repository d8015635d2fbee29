"""The kernel's boot sequence, run against a simulated screen and memory."""

from __future__ import annotations

import argparse
import sys
from typing import Any

from kernsim.devfs import create_devfs
from kernsim.fs import FileMode, FileSystem, FsError
from kernsim.multiboot import BOOTLOADER_MAGIC, MultibootInfo, is_bootloader_magic
from kernsim.phys import PhysicalAllocator
from kernsim.tty import fprintf
from kernsim.vga import VGA_ROW, VgaText

# Where the kernel image ends and free physical memory begins.
DEFAULT_MEM_END = 0x200000
HEAP_SIZE = 0x100000


class KernelPanic(RuntimeError):
    """The kernel stopped on an unrecoverable error."""


class Kernel:
    """Holds the screen, file system and memory set up during boot."""

    def __init__(self) -> None:
        self.screen = VgaText()
        self.fs: FileSystem | None = None
        self.stdout: int | None = None
        self.memory: PhysicalAllocator | None = None
        self.boot_info: MultibootInfo | None = None
        self.mem_end = DEFAULT_MEM_END

    def panic(self, message: str) -> None:
        """Show ``message`` and halt."""
        self.screen.print(message)
        raise KernelPanic(message)

    def boot(self, mb_magic: int, info: MultibootInfo | None = None) -> int:
        """Run the boot sequence; returns 0 when it completes."""
        self.screen.row = 0
        self.screen.col = 0
        self.screen.clear()
        self.screen.print("Boot starting...\n")

        if not is_bootloader_magic(mb_magic):
            self.panic("Invalid multiboot_magic")

        self.boot_info = info
        self.fs = FileSystem(create_devfs(self.screen))
        self.stdout = self.fs.open("stdout", FileMode.WRONLY)
        self.memory = PhysicalAllocator(self.mem_end, HEAP_SIZE)
        self.fs.close(self.stdout)
        self.stdout = None
        return 0

    def printf(self, text: str, *args: Any) -> None:
        """Format and write to the kernel's open standard output."""
        if self.fs is None or self.stdout is None:
            raise FsError("standard output is not open")
        fprintf(self.fs, self.stdout, text, *args)


def _screen_text(screen: VgaText) -> str:
    lines = [screen.line(row).rstrip() for row in range(VGA_ROW)]
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Boot a kernel and print what ends up on its screen."""
    parser = argparse.ArgumentParser(prog="kernsim", description="Boot the simulated kernel.")
    parser.add_argument(
        "--magic",
        type=lambda value: int(value, 0),
        default=BOOTLOADER_MAGIC,
        help="value the boot loader leaves in EAX",
    )
    args = parser.parse_args(argv)

    kernel = Kernel()
    status = 0
    try:
        kernel.boot(args.magic)
    except KernelPanic:
        status = 1
    text = _screen_text(kernel.screen)
    if text:
        print(text)
    return status


if __name__ == "__main__":
    sys.exit(main())
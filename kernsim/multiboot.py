"""Multiboot header and boot-information structures."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Iterator

SEARCH = 8192
HEADER_ALIGN = 4
HEADER_MAGIC = 0x1BADB002
BOOTLOADER_MAGIC = 0x2BADB002
MOD_ALIGN = 0x00001000
INFO_ALIGN = 0x00000004

# Flags of the multiboot header.
PAGE_ALIGN = 0x00000001
MEMORY_INFO = 0x00000002
VIDEO_MODE = 0x00000004
AOUT_KLUDGE = 0x00010000

FRAMEBUFFER_TYPE_INDEXED = 0
FRAMEBUFFER_TYPE_RGB = 1
FRAMEBUFFER_TYPE_EGA_TEXT = 2

_U32 = 0xFFFFFFFF

_HEADER = struct.Struct("<12I")
_HEADER_MIN = 12
_INFO = struct.Struct("<7I4I9I4HQ3I2B2x8s")
_MMAP_ENTRY = struct.Struct("<6I")
_MODULE = struct.Struct("<4I")


class InfoFlag(IntFlag):
    """Flags of the ``flags`` member of the boot information."""

    MEMORY = 0x00000001
    BOOTDEV = 0x00000002
    CMDLINE = 0x00000004
    MODS = 0x00000008
    AOUT_SYMS = 0x00000010
    ELF_SHDR = 0x00000020
    MEM_MAP = 0x00000040
    DRIVE_INFO = 0x00000080
    CONFIG_TABLE = 0x00000100
    BOOT_LOADER_NAME = 0x00000200
    APM_TABLE = 0x00000400
    VBE_INFO = 0x00000800
    FRAMEBUFFER_INFO = 0x00001000


class MemoryType(IntEnum):
    """Kinds of region reported in the memory map."""

    AVAILABLE = 1
    RESERVED = 2
    ACPI_RECLAIMABLE = 3
    NVS = 4
    BADRAM = 5


@dataclass(frozen=True)
class MultibootHeader:
    """The header a kernel image carries for the boot loader."""

    magic: int
    flags: int
    checksum: int
    header_addr: int = 0
    load_addr: int = 0
    load_end_addr: int = 0
    bss_end_addr: int = 0
    entry_addr: int = 0
    mode_type: int = 0
    width: int = 0
    height: int = 0
    depth: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> MultibootHeader:
        """Decode a header; fields past the data given default to zero."""
        if len(data) < _HEADER_MIN:
            raise ValueError(f"multiboot header needs {_HEADER_MIN} bytes, got {len(data)}")
        padded = bytes(data[: _HEADER.size]).ljust(_HEADER.size, b"\0")
        return cls(*_HEADER.unpack(padded))

    def is_valid(self) -> bool:
        """Whether the magic is right and the checksum balances."""
        total = (self.magic + self.flags + self.checksum) & _U32
        return self.magic == HEADER_MAGIC and total == 0


@dataclass(frozen=True)
class MultibootInfo:
    """The boot information structure handed over by the boot loader."""

    flags: int
    mem_lower: int
    mem_upper: int
    boot_device: int
    cmdline: int
    mods_count: int
    mods_addr: int
    syms: tuple[int, int, int, int]
    mmap_length: int
    mmap_addr: int
    drives_length: int
    drives_addr: int
    config_table: int
    boot_loader_name: int
    apm_table: int
    vbe_control_info: int
    vbe_mode_info: int
    vbe_mode: int
    vbe_interface_seg: int
    vbe_interface_off: int
    vbe_interface_len: int
    framebuffer_addr: int
    framebuffer_pitch: int
    framebuffer_width: int
    framebuffer_height: int
    framebuffer_bpp: int
    framebuffer_type: int
    framebuffer_palette_addr: int
    framebuffer_palette_num_colors: int
    framebuffer_rgb: tuple[int, int, int, int, int, int]

    @classmethod
    def from_bytes(cls, data: bytes) -> MultibootInfo:
        """Decode the structure from its in-memory layout."""
        if len(data) < _INFO.size:
            raise ValueError(f"multiboot info needs {_INFO.size} bytes, got {len(data)}")
        values = _INFO.unpack_from(data)
        head, syms, middle = values[:7], tuple(values[7:11]), values[11:27]
        colour_info = values[27]
        palette_addr, palette_colors = struct.unpack_from("<IH", colour_info)
        return cls(
            *head,
            syms,
            *middle,
            palette_addr,
            palette_colors,
            tuple(colour_info[:6]),
        )

    def has(self, flag: InfoFlag) -> bool:
        """Whether the boot loader filled in the fields behind ``flag``."""
        return bool(self.flags & flag)


@dataclass(frozen=True)
class MemoryMapEntry:
    """One region of the memory map."""

    size: int
    addr: int
    length: int
    type: int

    @classmethod
    def from_bytes(cls, data: bytes) -> MemoryMapEntry:
        if len(data) < _MMAP_ENTRY.size:
            raise ValueError(f"memory map entry needs {_MMAP_ENTRY.size} bytes, got {len(data)}")
        size, addr_low, addr_high, len_low, len_high, kind = _MMAP_ENTRY.unpack_from(data)
        return cls(size, addr_high << 32 | addr_low, len_high << 32 | len_low, kind)

    @property
    def available(self) -> bool:
        return self.type == MemoryType.AVAILABLE


@dataclass(frozen=True)
class ModuleEntry:
    """One boot module: bytes ``mod_start`` to ``mod_end - 1``."""

    mod_start: int
    mod_end: int
    cmdline: int
    pad: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> ModuleEntry:
        if len(data) < _MODULE.size:
            raise ValueError(f"module entry needs {_MODULE.size} bytes, got {len(data)}")
        return cls(*_MODULE.unpack_from(data))


def iter_memory_map(data: bytes) -> Iterator[MemoryMapEntry]:
    """Yield the entries of a memory-map buffer.

    Each entry's ``size`` field does not count itself, so the next entry
    starts ``size + 4`` bytes further on.
    """
    offset = 0
    while offset < len(data):
        if offset + _MMAP_ENTRY.size > len(data):
            raise ValueError(f"truncated memory map entry at offset {offset}")
        entry = MemoryMapEntry.from_bytes(data[offset:])
        yield entry
        offset += entry.size + 4


def is_bootloader_magic(value: int) -> bool:
    """Whether ``value`` is the magic a compliant boot loader leaves in EAX."""
    return value == BOOTLOADER_MAGIC
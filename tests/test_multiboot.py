import struct

import pytest

from kernsim.multiboot import (
    BOOTLOADER_MAGIC,
    HEADER_MAGIC,
    InfoFlag,
    MemoryMapEntry,
    MemoryType,
    ModuleEntry,
    MultibootHeader,
    MultibootInfo,
    is_bootloader_magic,
    iter_memory_map,
)

INFO_FORMAT = "<7I4I9I4HQ3I2B2x8s"


def _entry(addr, length, kind, size=20):
    body = struct.pack(
        "<6I", size, addr & 0xFFFFFFFF, addr >> 32, length & 0xFFFFFFFF, length >> 32, kind
    )
    return body + b"\0" * (size + 4 - len(body))


def test_bootloader_magic():
    assert is_bootloader_magic(0x2BADB002)
    assert not is_bootloader_magic(0x1BADB002)


def test_header_checksum_valid():
    flags = 3
    checksum = (-(HEADER_MAGIC + flags)) & 0xFFFFFFFF
    header = MultibootHeader.from_bytes(struct.pack("<3I", HEADER_MAGIC, flags, checksum))
    assert header.magic == HEADER_MAGIC
    assert header.flags == flags
    assert header.entry_addr == 0
    assert header.is_valid()


def test_header_bad_checksum_or_magic():
    bad_sum = MultibootHeader.from_bytes(struct.pack("<3I", HEADER_MAGIC, 0, 1))
    assert not bad_sum.is_valid()
    wrong_magic = MultibootHeader.from_bytes(
        struct.pack("<3I", BOOTLOADER_MAGIC, 0, (-BOOTLOADER_MAGIC) & 0xFFFFFFFF)
    )
    assert not wrong_magic.is_valid()


def test_header_full_fields():
    values = [HEADER_MAGIC, 0x10000, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9]
    header = MultibootHeader.from_bytes(struct.pack("<12I", *values))
    assert header.entry_addr == 5
    assert header.depth == 9


def test_header_too_short():
    with pytest.raises(ValueError):
        MultibootHeader.from_bytes(b"\x02\xb0")


def test_info_too_short():
    with pytest.raises(ValueError):
        MultibootInfo.from_bytes(b"\0" * 40)


def test_memory_map_iteration():
    data = _entry(0, 0x9FC00, MemoryType.AVAILABLE) + _entry(
        0x1_0010_0000, 0x2000, MemoryType.RESERVED
    )
    entries = list(iter_memory_map(data))
    assert [e.addr for e in entries] == [0, 0x1_0010_0000]
    assert [e.length for e in entries] == [0x9FC00, 0x2000]
    assert entries[0].available
    assert entries[1].type == MemoryType.RESERVED


def test_memory_map_honours_entry_size():
    data = _entry(0x100000, 0x1000, MemoryType.NVS, size=28) + _entry(0, 1, MemoryType.BADRAM)
    entries = list(iter_memory_map(data))
    assert [e.type for e in entries] == [MemoryType.NVS, MemoryType.BADRAM]


def test_memory_map_truncated():
    data = _entry(0, 16, MemoryType.AVAILABLE) + b"\x14\0\0\0"
    with pytest.raises(ValueError):
        list(iter_memory_map(data))


def test_memory_map_entry_from_bytes_short():
    with pytest.raises(ValueError):
        MemoryMapEntry.from_bytes(b"\0" * 10)


def test_module_entry():
    module = ModuleEntry.from_bytes(struct.pack("<4I", 0x200000, 0x201000, 0x300, 0))
    assert module.mod_start == 0x200000
    assert module.mod_end == 0x201000
    assert module.cmdline == 0x300
    with pytest.raises(ValueError):
        ModuleEntry.from_bytes(b"\0" * 8)
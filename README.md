# kernsim

`kernsim` runs a tiny hobby kernel as a Python program. The boot sequence
clears an 80×25 VGA text screen held in memory, prints `Boot starting...`,
checks the multiboot magic value, builds a device file system with a single
`stdout` node, opens that node, sets up a bump allocator for physical
memory, and then closes the node again.

## Installation

```
pip install .
```

To install the test tools as well:

```
pip install .[test]
```

## Command line

```
kernsim
kernsim --magic 0x1234
```

This boots the simulated kernel and prints the non-blank lines of the
screen as they stand when boot ends. `--magic` sets the value the boot
loader is taken to have left in EAX. It accepts decimal, `0x` hex and other
Python integer prefixes, and it defaults to the correct boot-loader magic
`0x2BADB002`. If the magic is wrong, the kernel panics: the screen shows
`Invalid multiboot_magic` and the command exits with status 1. Otherwise it
exits with status 0.

## Library use

```python
from kernsim.fs import FileMode
from kernsim.kernel import Kernel
from kernsim.multiboot import BOOTLOADER_MAGIC

kernel = Kernel()
kernel.boot(BOOTLOADER_MAGIC)
print(kernel.screen.line(0).rstrip())   # Boot starting...

# Boot closes standard output before it returns, so open it again before
# writing through Kernel.printf.
kernel.stdout = kernel.fs.open("stdout", FileMode.WRONLY)
kernel.printf("value %d in hex is %x\n", 255, 255)
print(kernel.screen.line(1).rstrip())   # value 255 in hex is FF
```

`Kernel.boot` raises `KernelPanic` when the magic is wrong.
`Kernel.printf` raises `FsError` when standard output is not open.

Each module can also be used by itself:

- `kernsim.multiboot` decodes multiboot structures from raw bytes:
  `MultibootHeader` (with `is_valid`), `MultibootInfo` (with `has` for
  `InfoFlag` bits), `MemoryMapEntry`, `ModuleEntry`, `iter_memory_map`,
  `is_bootloader_magic`, and the `MemoryType` enum.
- `kernsim.vga` has `VgaText`, the text screen. It has a cursor that wraps
  at column 80, moves 4 columns on a tab, and scrolls at row 25. Its
  methods are `clear`, `setc`, `scroll`, `putc`, `print` and `line`. The
  module also has the `Colour` enum and the `attribute` and `cell` helpers.
- `kernsim.fs` has `FileSystem`, which provides `mount`, `get_dir`, `open`,
  `close`, `seek`, `read`, `write` and `node` over a tree of `FsNode`
  objects. Up to 64 handles can be open at once and up to 4 mounts can
  exist. Errors raise `FsError`. The module also has the `FsFlag` and
  `FileMode` enums and the `DirEnt` and `FsMount` records.
- `kernsim.devfs` has `create_devfs`, which builds a `DevFsRoot` directory
  named `dev`. It holds a `StdoutNode` whose writes go to a `VgaText`
  screen. Its `readdir` numbers entries from 1.
- `kernsim.tty` has `format_text`, a small printf that supports `%d`, `%x`,
  `%c`, `%s` and `%%` and drops any other specifier. It also has
  `format_integer`, and `fprintf`, which writes formatted text to an open
  handle.
- `kernsim.phys` has `PhysicalAllocator`, a bump allocator. `alloc`
  returns addresses and raises `MemoryError` when the region runs out.
- `kernsim.strings` has `tokenize`, which splits paths, and `names_match`,
  the prefix-style name comparison the file system uses.

## What it does not do

- No real hardware is touched. The screen is a list of cells in memory, and
  the allocator only hands out numbers.
- The only device is `stdout`, and it can only be written to. Reading from
  it returns nothing. There are no files with stored contents.
- `open` cannot create files. A missing path raises `FsError` even when
  `FileMode.CREAT` is given, and `FileMode.APPEND` has no effect.
- `PhysicalAllocator.free` only checks that the address was handed out. The
  space is never reclaimed.

## Tests

```
pytest
```
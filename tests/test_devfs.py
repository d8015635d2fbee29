import pytest

from kernsim.devfs import DevFsRoot, StdoutNode, create_devfs
from kernsim.fs import DirEnt, FileMode, FileSystem, FsFlag
from kernsim.vga import VgaText


@pytest.fixture
def screen():
    return VgaText()


def test_root_is_dev_directory(screen):
    root = create_devfs(screen)
    assert root.name == "dev"
    assert root.is_directory()
    assert isinstance(root, DevFsRoot)


def test_readdir_is_one_based(screen):
    root = create_devfs(screen)
    assert root.readdir(1) == DirEnt("stdout", 0)
    assert root.readdir(0) is None
    assert root.readdir(2) is None


def test_finddir_stdout(screen):
    root = create_devfs(screen)
    node = root.finddir("stdout")
    assert isinstance(node, StdoutNode)
    assert node.flags == FsFlag.FILE
    assert root.finddir("stdin") is None


def test_finddir_matches_prefix(screen):
    root = create_devfs(screen)
    assert root.finddir("std") is root.finddir("stdout")


def test_stdout_write_shows_on_screen(screen):
    node = StdoutNode(screen)
    assert node.write(0, b"hi there") == 8
    assert screen.line(0).startswith("hi there")


def test_stdout_write_skips_before_offset(screen):
    node = StdoutNode(screen)
    assert node.write(1, b"abc") == 3
    assert screen.line(0).startswith("bc ")


def test_stdout_does_not_read(screen):
    assert StdoutNode(screen).read(0, 4) == b""


def test_open_and_write_through_file_system(screen):
    fs = FileSystem(create_devfs(screen))
    fh = fs.open("stdout", FileMode.WRONLY)
    fs.write(fh, b"line\nnext")
    assert screen.line(0).startswith("line ")
    assert screen.line(1).startswith("next")
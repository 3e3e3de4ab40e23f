# archlab

Tools from a computer architecture and operating systems course, gathered in
one Python package with no third-party dependencies.

It has four parts:

- `archlab.v6fs`: reads Unix Version 6 disk images. `DiskImage` reads and
  writes whole 512-byte sectors; `UnixFileSystem` checks the boot block magic
  number, reads the superblock and gives access to inodes (`iget`), block
  mapping (`index_lookup`), file blocks (`get_block`), directory entries
  (`find_name`) and absolute pathnames (`lookup`). `archlab.v6fs.checksum`
  computes SHA-1 checksums of files.
- `archlab.armsim`: the command shell of an ARM instruction-level simulator.
  `Memory` maps text, data and stack regions of little-endian 32-bit words;
  `Simulator` holds the CPU state and carries out the `go`, `run`, `mdump`,
  `rdump`, `input`, `?` and `quit` commands.
- `archlab.strproc`: `StringProcList`, an ordered list of typed string nodes
  that can concatenate the hashes of every node of a given type, and a tester
  that writes a reference report built from it.
- `archlab.minishell`: argument handling for a process ring exercise, and a
  prompt that splits each line into pipeline commands.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Commands

### `diskimageaccess`

```
diskimageaccess [-q] [-i] [-p] DISKIMAGE
```

Opens a V6 disk image read-only and, unless `-q` is given, prints its size
and the superblock's `s_isize`, `s_fsize`, `s_nfree` and `s_ninode`. `-i`
prints the mode, size and checksum of every allocated inode; `-p` walks the
directory tree from `/` and prints the inode, mode, size and checksum of every
path. Problems with single inodes or paths are reported on standard error.

### `arm-sim`

```
arm-sim PROGRAM_FILE [PROGRAM_FILE ...]
```

Loads each program file of whitespace-separated hexadecimal words at the
start of the text region (each file is loaded at the same address) and opens
the `ARM-SIM>` prompt. Type `?` for the list of commands. Register and memory
dumps are also written to a file named `dumpsim` in the current directory.

### `ring`

```
ring N C S
```

Reads the number of processes, the value to send and the starting process as
integers and prints them in one line. With the wrong number of arguments it
prints a usage line.

### `pipeline-shell`

```
pipeline-shell
```

Shows a `Shell>` prompt, splits each line on `|` and prints each command found
as `Command <n>: <text>`, until the input ends.

### `strproc-tester`

```
strproc-tester [OUTPUT]
```

Builds lists of star, constellation and mission names with node types drawn
from the C library's `rand()` sequence after `srand(0)`, and writes the lists
and their concatenations by type to `OUTPUT`, by default
`salida.caso.propio.ej1.txt`. Any existing file of that name is replaced.

## Library use

```python
from archlab.v6fs.disk import DiskImage
from archlab.v6fs.filesystem import UnixFileSystem
from archlab.v6fs.checksum import checksum_path, checksum_hex

with DiskImage("disk.img", True) as disk:
    fs = UnixFileSystem(disk)
    inumber = fs.lookup("/bin/ls")
    print(inumber, checksum_hex(checksum_path(fs, "/bin/ls")))
```

Failed reads and lookups raise `archlab.v6fs.filesystem.FileSystemError`.

```python
from archlab.strproc.strlist import StringProcList

items = StringProcList()
items.add_node(0, "hola")
items.add_node(0, "a")
items.add_node(0, "todos!")
print(items.concat(0, "hash"))   # hashholaatodos!
```

A `Simulator` can be given an executor: a function called with the simulator
once per cycle, which reads `current_state` and `memory`, writes `next_state`
and sets `running` to `False` to halt.

## What it does not do

- The ARM simulator does not decode or execute instructions. Without an
  executor each cycle only copies the next state into the current one and
  counts the instruction, so the machine never halts by itself and `go`
  runs forever; use `run n` instead.
- `ring` does not create any processes or pass anything between them.
- `pipeline-shell` does not run the commands it lists.
- The V6 file system reader does not write to the file system: only whole
  sectors can be written through `DiskImage`.
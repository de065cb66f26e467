# procsys

Typed access to Linux kernel variables under `/proc/sys`: the same
settings `sysctl` manages, read and written as plain files.

Every reading and writing function takes an optional `root` argument.
It defaults to the live `/proc/sys` tree; point it at a directory laid
out the same way to work against a snapshot or a test fixture.

## Installation

```
pip install procsys
```

## Modules

- `procsys.common`: the shared helpers `sys_path`, `read_file`,
  `read_value` and `write_value`, and the error classes.
- `procsys.vm`: virtual memory tuning. Covers `admin_reserve_kbytes`,
  `max_map_count` (with their `set_` counterparts), `compact_memory`
  and `drop_caches` with the `DropCache` enum.
- `procsys.kernel`: general kernel settings.
  - `Version` parses and compares kernel release strings; anything
    after the numeric `major.minor.patch` part is ignored.
  - `SemaphoreLimits` parses and reads the System V semaphore limits.
  - `pid_max`, `shmall`, `shmmax`, `set_shmmax`, `shmmni`,
    `threads_max` and `set_threads_max`.
  - `sysrq` and `set_sysrq` with `SysRq` and `AllowedFunctions`.
- `procsys.kernel_random`: `entropy_avail`, `poolsize`,
  `read_wakeup_threshold` (falling back to `write_wakeup_threshold`
  when the read file is missing), `write_wakeup_threshold`, `uuid` and
  `boot_id`.
- `procsys.keys`: limits for kernel key management: `gc_delay`,
  `persistent_keyring_expiry`, `maxbytes`, `maxkeys`, `root_maxbytes`,
  `root_maxkeys` and the `set_` functions for the last four.
- `procsys.fs`: filesystem values. Covers `dentry_state`
  (`DEntryState`), `file_nr` (`FileState`), `file_max`, `set_file_max`
  and the epoll limit `max_user_watches` / `set_max_user_watches`.
- `procsys.binfmt_misc`: `enabled` reports whether the handler is on,
  and `list_entries` returns the registered binary formats, sorted by
  name, as `BinFmtEntry` objects whose `data` is a `BinFmtExtension` or
  a `BinFmtMagic`.

## Examples

```python
from procsys import kernel, vm, fs

print(kernel.Version.current())
print(kernel.Version.parse("3.16.0-6-amd64") >= kernel.Version(3, 16, 0))

limits = kernel.SemaphoreLimits.parse("32000\t1024000000\t500\t32000")
print(limits.semmni)

state = fs.file_nr()
print(state.allocated, state.free, state.max)

print(vm.DropCache.parse("3") is vm.DropCache.ALL)  # True
```

Reading from a copy of the tree instead of the live system:

```python
from procsys import kernel

print(kernel.pid_max(root="/tmp/snapshot/sys"))
```

Changing a value needs the right privileges:

```python
from procsys import vm

vm.set_max_map_count(262144)
vm.drop_caches(vm.DropCache.PAGE_CACHE)
```

## Errors

Reading and writing raise `procsys.common.ProcError` or one of its
subclasses:

- `NotFoundError` when a file does not exist, for example when the
  running kernel lacks the feature.
- `PermissionDeniedError` when access is refused.
- `InternalError` when a file's contents cannot be parsed.

`set_threads_max` raises `ProcError` itself when the limit is outside
`THREADS_MIN`..`THREADS_MAX` on Linux 4.1 or later.

The `parse` class methods (`Version.parse`, `SemaphoreLimits.parse`,
`SysRq.parse`, `DropCache.parse`, `DEntryState.parse`,
`FileState.parse`) raise a plain `ValueError` when called directly on
bad text; `hex_to_bytes` and `BinFmtEntry.from_string` raise
`InternalError`.

## What it does not do

This is a library only: it installs no command-line tool, and it covers
only the variables listed above rather than every file under
`/proc/sys`.
"""Read and tune Linux kernel variables exposed under /proc/sys."""

__version__ = "0.1.0"
__all__ = ["binfmt_misc", "common", "fs", "kernel", "kernel_random", "keys", "vm"]
"""portafs — portable directory iteration, path helpers and metadata queries."""

__version__ = "0.1.0"

from portafs.allocator import Allocator, DefaultAllocator, TrackingAllocator  # noqa: E402
from portafs.directory import calculate_directory_size, get_cwd, mkdir  # noqa: E402
from portafs.errors import (  # noqa: E402
    get_error_string,
    is_error_set,
    reset_error,
)
from portafs.iterator import (  # noqa: E402
    AdvanceResult,
    DirectoryIterator,
    IterState,
    dir_iter_end,
    dir_iter_next,
    dir_iter_start,
)
from portafs.metadata import (  # noqa: E402
    exists,
    get_file_size,
    is_directory,
    is_file,
    is_readable,
    is_readable_and_writable,
    is_writable,
)
from portafs.paths import expand_user, join_path, to_native_path  # noqa: E402

__all__ = [
    "AdvanceResult",
    "Allocator",
    "DefaultAllocator",
    "DirectoryIterator",
    "IterState",
    "TrackingAllocator",
    "calculate_directory_size",
    "dir_iter_end",
    "dir_iter_next",
    "dir_iter_start",
    "exists",
    "expand_user",
    "get_cwd",
    "get_error_string",
    "get_file_size",
    "is_directory",
    "is_error_set",
    "is_file",
    "is_readable",
    "is_readable_and_writable",
    "is_writable",
    "join_path",
    "mkdir",
    "reset_error",
    "to_native_path",
]

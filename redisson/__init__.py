VERSION = (0, 1, 0)
__version__ = ".".join(map(str, VERSION))

from redisson.client import Client  # noqa: E402
from redisson.conf import Conf, clients, get_client  # noqa: E402
from redisson.context import deadline, skip_check, with_sub_command_name  # noqa: E402
from redisson.exceptions import Nil, is_nil  # noqa: E402

__all__ = [
    "VERSION",
    "Client",
    "Conf",
    "Nil",
    "__version__",
    "clients",
    "deadline",
    "get_client",
    "is_nil",
    "skip_check",
    "with_sub_command_name",
]

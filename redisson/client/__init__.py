# Dispatcher shared by clients and mixins
from redisson.client.base import BaseClient

# Client composing every command family
from redisson.client.default import Client

__all__ = [
    "BaseClient",
    "Client",
]

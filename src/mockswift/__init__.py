"""MockSwift: an in-memory OpenStack Swift API server for tests."""

from mockswift.harness import SwiftServer
from mockswift.server import create_app
from mockswift.storage import SwiftStore

__all__ = ["SwiftServer", "SwiftStore", "create_app"]

__version__ = "0.1.0"

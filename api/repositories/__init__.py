"""
API Repositories - Menu storage abstraction layer

Provides a clean interface for reading and writing the menu document so the
routers do not care whether it lives in a local file or elsewhere.

Pattern: Repository Pattern
"""

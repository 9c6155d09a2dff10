"""
Repositories - Resource access abstraction layer

Provides a clean interface for entity retrieval and mutation that hides
the REST backend behind plain repository verbs.

Pattern: Repository Pattern
"""

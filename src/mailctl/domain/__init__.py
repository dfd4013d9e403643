"""Domain layer: pure logic with no I/O.

The command interpreter and mail-id literal rules live here. Nothing in
this package touches the store, the terminal, or configuration.
"""

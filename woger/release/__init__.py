"""Release engine.

- variables: the variable vocabulary and the VariableStore
- registry: the read-only MethodRegistry
- resolver: required-variable arithmetic
- notes: interactive acquisition of the release notes
- upload_commands: parser for gnulib's upload instructions
- fsm / dispatcher: the run itself
- methods: the built-in release methods
"""

from __future__ import annotations

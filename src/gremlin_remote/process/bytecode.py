"""Compiled step sequence: the wire-representable form of a traversal."""

from __future__ import annotations

from typing import Any, NamedTuple


class Instruction(NamedTuple):
    operator: str
    arguments: tuple[Any, ...] = ()


class Bytecode:
    """Ordered source and step instructions of a traversal.

    Instances are what strategy configuration stores in place of nested
    traversals, so they are never lowered a second time.
    """

    def __init__(self, bytecode: Bytecode | None = None) -> None:
        if bytecode is None:
            self.source_instructions: list[Instruction] = []
            self.step_instructions: list[Instruction] = []
        else:
            self.source_instructions = list(bytecode.source_instructions)
            self.step_instructions = list(bytecode.step_instructions)

    def add_source(self, operator: str, *arguments: Any) -> None:
        self.source_instructions.append(Instruction(operator, tuple(arguments)))

    def add_step(self, operator: str, *arguments: Any) -> None:
        self.step_instructions.append(Instruction(operator, tuple(arguments)))

    def to_wire(self) -> dict[str, list[list[Any]]]:
        """Return plain lists, with nested bytecode converted recursively."""
        return {
            "source": [_instruction_to_wire(i) for i in self.source_instructions],
            "step": [_instruction_to_wire(i) for i in self.step_instructions],
        }

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Bytecode)
            and self.source_instructions == other.source_instructions
            and self.step_instructions == other.step_instructions
        )

    def __repr__(self) -> str:
        return f"Bytecode(source={self.source_instructions!r}, step={self.step_instructions!r})"


def _instruction_to_wire(instruction: Instruction) -> list[Any]:
    return [instruction.operator, *(_argument_to_wire(a) for a in instruction.arguments)]


def _argument_to_wire(value: Any) -> Any:
    if isinstance(value, Bytecode):
        return value.to_wire()
    if isinstance(value, (list, tuple)):
        return [_argument_to_wire(v) for v in value]
    if isinstance(value, dict):
        return {k: _argument_to_wire(v) for k, v in value.items()}
    return value

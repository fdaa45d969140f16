"""
Servo Runtime Environment

Lexical scopes are records in a ScopeArena, addressed by integer handle.
Each record stores an optional parent handle, its bindings and the set of
names declared constant. An Environment is a lightweight view of one record;
FunctionValues keep the arena and handle of their declaration scope.

Key classes:
- ScopeRecord: Bindings, constants and parent handle of one scope
- ScopeArena: Owner of all records created during an evaluation
- Environment: declare / assign / lookup / resolve over the parent chain
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from servo.errors import InternalError, ScopeReferenceError
from servo.runtime.values import RuntimeValue

logger = logging.getLogger(__name__)


@dataclass
class ScopeRecord:
    """Bindings of a single scope."""
    parent: Optional[int] = None
    variables: Dict[str, RuntimeValue] = field(default_factory=dict)
    constants: Set[str] = field(default_factory=set)
    captured: bool = False


class ScopeArena:
    """
    Storage for scope records.

    Released slots are reused. Only scopes that no function captured are
    ever released, so a live FunctionValue never sees its closure recycled.
    """

    _ids = itertools.count(1)

    def __init__(self):
        self.id = next(ScopeArena._ids)
        self.records: List[Optional[ScopeRecord]] = []
        self._free: List[int] = []

    def allocate(self, parent: Optional[int] = None) -> int:
        record = ScopeRecord(parent=parent)
        if self._free:
            handle = self._free.pop()
            self.records[handle] = record
        else:
            handle = len(self.records)
            self.records.append(record)
        return handle

    def get(self, handle: int) -> ScopeRecord:
        record = self.records[handle] if 0 <= handle < len(self.records) else None
        if record is None:
            raise InternalError(f"Scope handle {handle} is not live")
        return record

    def capture(self, handle: int) -> None:
        """Mark a scope as referenced by a closure."""
        self.get(handle).captured = True

    def release(self, handle: int) -> bool:
        """Free a scope unless a closure captured it. Returns whether it was freed."""
        record = self.get(handle)
        if record.captured:
            return False
        self.records[handle] = None
        self._free.append(handle)
        return True

    def live_count(self) -> int:
        return sum(1 for record in self.records if record is not None)


class Environment:
    """
    View of one scope in an arena.

    Environment() creates a root scope in a fresh arena;
    Environment(parent) creates a child scope in the parent's arena.
    """

    def __init__(self, parent: Optional[Environment] = None):
        if parent is None:
            self.arena = ScopeArena()
            self.handle = self.arena.allocate()
        else:
            self.arena = parent.arena
            self.handle = self.arena.allocate(parent.handle)

    @classmethod
    def at(cls, arena: ScopeArena, handle: int) -> Environment:
        """View an existing record, e.g. a function's closure."""
        arena.get(handle)
        env = cls.__new__(cls)
        env.arena = arena
        env.handle = handle
        return env

    @property
    def record(self) -> ScopeRecord:
        return self.arena.get(self.handle)

    @property
    def parent(self) -> Optional[Environment]:
        parent = self.record.parent
        return None if parent is None else Environment.at(self.arena, parent)

    def child(self) -> Environment:
        return Environment(self)

    def declare(self, name: str, value: RuntimeValue, constant: bool = False) -> RuntimeValue:
        record = self.record
        if name in record.variables:
            raise ScopeReferenceError(
                f"Cannot declare variable {name}. As it already is defined.", name=name
            )

        record.variables[name] = value
        if constant:
            record.constants.add(name)
        return value

    def assign(self, name: str, value: RuntimeValue) -> RuntimeValue:
        owner = self.resolve(name).record
        if name in owner.constants:
            raise ScopeReferenceError(
                f"Cannot reassign to variable {name} as it was declared constant.", name=name
            )

        owner.variables[name] = value
        return value

    def lookup(self, name: str) -> RuntimeValue:
        return self.resolve(name).record.variables[name]

    def resolve(self, name: str) -> Environment:
        """Nearest scope, starting at this one, that binds `name`."""
        handle: Optional[int] = self.handle
        while handle is not None:
            record = self.arena.get(handle)
            if name in record.variables:
                return Environment.at(self.arena, handle)
            handle = record.parent

        raise ScopeReferenceError(f"Cannot resolve '{name}' as it does not exist.", name=name)

    def is_constant(self, name: str) -> bool:
        return name in self.resolve(name).record.constants

    def names(self) -> List[str]:
        """Names bound directly in this scope."""
        return list(self.record.variables)

    def __contains__(self, name: str) -> bool:
        try:
            self.resolve(name)
        except ScopeReferenceError:
            return False
        return True

    def __repr__(self) -> str:
        return f"Environment(handle={self.handle}, names={self.names()!r})"

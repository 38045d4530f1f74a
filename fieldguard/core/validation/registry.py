"""
Validator registry for request field validation.

Associates validator callables with named request fields across the four
request-data sources (path parameters, query parameters, headers, cookies).
The registry is built once at startup; the middleware works from an
immutable snapshot of it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# Returns None when the value is accepted, raises ValidationError otherwise.
ValidatorFn = Callable[[str], None]


class FieldSource(str, Enum):
    """Where in the request a field value comes from."""

    PATH_PARAM = "path_param"
    QUERY_PARAM = "query_param"
    HEADER = "header"
    COOKIE = "cookie"


@dataclass(frozen=True)
class FieldKey:
    """Identifies one validatable request field by source and name."""

    source: FieldSource
    name: str

    @classmethod
    def path_param(cls, name: str) -> "FieldKey":
        return cls(FieldSource.PATH_PARAM, name)

    @classmethod
    def query_param(cls, name: str) -> "FieldKey":
        return cls(FieldSource.QUERY_PARAM, name)

    @classmethod
    def header(cls, name: str) -> "FieldKey":
        return cls(FieldSource.HEADER, name)

    @classmethod
    def cookie(cls, name: str) -> "FieldKey":
        return cls(FieldSource.COOKIE, name)

    def __str__(self) -> str:
        return f"{self.source.value}:{self.name}"


class ValidatorRegistry:
    """
    Ordered mapping from FieldKey to a chain of validators.

    Chains keep registration order, which is also evaluation order, so a
    validator registered first reports its failure before later ones.
    Keys themselves are kept in the order they were first registered.

    Example:
        >>> registry = ValidatorRegistry()
        >>> registry.register(FieldKey.query_param("test"), is_bool)
        >>> registry.register(FieldKey.query_param("test"), min_length(10))
        >>> len(registry.lookup(FieldKey.query_param("test")))
        2
    """

    def __init__(self, validators: Optional[Mapping[FieldKey, ValidatorFn]] = None):
        """
        Initialize the registry.

        Args:
            validators: Optional mapping of one validator per key, applied
                as individual registrations
        """
        self._chains: Dict[FieldKey, List[ValidatorFn]] = {}
        if validators:
            self.with_validators(validators)

    def register(self, key: FieldKey, validator: ValidatorFn) -> None:
        """Append a validator to the chain for key, creating the chain if absent."""
        chain = self._chains.setdefault(key, [])
        chain.append(validator)
        logger.debug(
            "Registered validator %s for %s (chain length %d)",
            getattr(validator, "__name__", repr(validator)), key, len(chain)
        )

    def with_validators(self, validators: Mapping[FieldKey, ValidatorFn]) -> "ValidatorRegistry":
        """
        Register one validator per key from a mapping.

        Registrations are appended, so this composes with anything already
        registered for the same keys.

        Returns:
            The registry itself, for builder-style setup
        """
        for key, validator in validators.items():
            self.register(key, validator)
        return self

    def lookup(self, key: FieldKey) -> Tuple[ValidatorFn, ...]:
        """Get the validator chain for key, or an empty tuple."""
        return tuple(self._chains.get(key, ()))

    def snapshot(self) -> Mapping[FieldKey, Tuple[ValidatorFn, ...]]:
        """Get a read-only copy of all chains, detached from later registrations."""
        return MappingProxyType({key: tuple(chain) for key, chain in self._chains.items()})

    def keys(self) -> List[FieldKey]:
        return list(self._chains)

    def __contains__(self, key: object) -> bool:
        return key in self._chains

    def __iter__(self) -> Iterator[FieldKey]:
        return iter(list(self._chains))

    def __len__(self) -> int:
        return len(self._chains)

    def __repr__(self) -> str:
        return f"ValidatorRegistry(keys={[str(key) for key in self._chains]})"

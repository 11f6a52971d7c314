"""
Genesis generation errors.

Every error here is fatal: a run that raises produced no genesis data.
"""

from typing import Iterable, List


class GenesisGenerationError(Exception):
    """Base class for failures of a genesis generation run"""
    pass


class ConfigurationInconsistency(GenesisGenerationError):
    """One or more balance-distribution checks failed.

    All failed checks are collected and carried together in ``errors``.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__(format_all_errors(self.errors))


class LibraryContractViolation(GenesisGenerationError):
    """A key/address primitive broke its documented contract"""
    pass


class UnsupportedDistributionVariant(GenesisGenerationError):
    """The requested distribution or committee source is not implemented"""
    pass


def format_all_errors(errors: List[str]) -> str:
    if not errors:
        return "No errors"
    lines = [f"{len(errors)} consistency check(s) failed:"]
    lines.extend(f"  - {err}" for err in errors)
    return "\n".join(lines)

# ketsim/errors.py
# each error also subclasses ValueError or AssertionError

class KetsimError(Exception):
    """Base class for ketsim errors."""

class InvalidGateError(KetsimError, ValueError):
    """Matrix is not square, not 2^k sized, not finite, or not unitary."""

class InvalidTargetError(KetsimError, ValueError):
    """Target list has the wrong length, duplicates, non-integer or out-of-range qubits."""

class DegenerateStateError(KetsimError, ValueError):
    """Normalizing a state whose total probability is zero."""

class InvalidStateError(KetsimError, ValueError):
    """Amplitude array with the wrong shape or a non-complex dtype."""

class NormalizationError(KetsimError, AssertionError):
    """A state that should be normalized drifted outside tolerance."""

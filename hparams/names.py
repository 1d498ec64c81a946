"""
Hyper-parameter names.

A ParamName is a plain string with a distinct type. The vocabulary is open:
the constants below are the names that built-in models read, but callers
may introduce their own names without registering them anywhere.
"""

from __future__ import annotations


class ParamName(str):
    """
    Name of a hyper-parameter.

    Compares and hashes like the underlying string, so ``ParamName("Lr")``
    and ``"Lr"`` address the same entry in a Params or ParamsGrid.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"ParamName({str.__repr__(self)})"


LR = ParamName("Lr")  # learning rate
REG = ParamName("Reg")  # regularization strength
N_EPOCHS = ParamName("NEpochs")  # number of epochs
N_FACTORS = ParamName("NFactors")  # number of factors
RANDOM_STATE = ParamName("RandomState")  # random seed
INIT_MEAN = ParamName("InitMean")  # mean of gaussian initial parameters
INIT_STD_DEV = ParamName("InitStdDev")  # std-dev of gaussian initial parameters
ALPHA = ParamName("Alpha")  # weight for negative samples in ALS
SIMILARITY = ParamName("Similarity")
USE_FEATURE = ParamName("UseFeature")

WELL_KNOWN_NAMES = frozenset(
    {
        LR,
        REG,
        N_EPOCHS,
        N_FACTORS,
        RANDOM_STATE,
        INIT_MEAN,
        INIT_STD_DEV,
        ALPHA,
        SIMILARITY,
        USE_FEATURE,
    }
)

# Values for SIMILARITY
SIMILARITY_COSINE = "Cosine"
SIMILARITY_DOT = "Dot"


def as_name(key: object) -> ParamName:
    """Coerce a mapping key to a ParamName, rejecting non-string keys."""
    if isinstance(key, ParamName):
        return key
    if isinstance(key, str):
        return ParamName(key)
    raise TypeError(f"Parameter names must be strings, got {type(key).__name__}")

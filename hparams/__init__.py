"""
hparams: Hyper-parameter containers for model training and grid search.

Params holds one typed value per hyper-parameter name; ParamsGrid holds the
candidate values of a grid search.

Example:
    import hparams
    from hparams import LR, N_EPOCHS, N_FACTORS, REG

    defaults = hparams.Params({LR: 0.007, N_EPOCHS: 100, N_FACTORS: 80, REG: 0.1})
    params = defaults.overwrite({N_FACTORS: 20})
    n_factors = params.get_int(N_FACTORS, 10)

    grid = hparams.ParamsGrid({LR: [0.001, 0.01], N_FACTORS: [8, 16, 32]})
    grid.fill({REG: [0.01, 0.1]})
    print(grid.num_combinations())  # 12
"""

__version__ = "0.1.0"

from hparams._canonical import SerializationError
from hparams.grid import ParamsGrid
from hparams.names import (
    ALPHA,
    INIT_MEAN,
    INIT_STD_DEV,
    LR,
    N_EPOCHS,
    N_FACTORS,
    RANDOM_STATE,
    REG,
    SIMILARITY,
    SIMILARITY_COSINE,
    SIMILARITY_DOT,
    USE_FEATURE,
    WELL_KNOWN_NAMES,
    ParamName,
)
from hparams.params import Params
from hparams.values import Kind, Lookup, LookupStatus, ParamKindError, Value

__all__ = [
    # Version
    "__version__",
    # Names
    "ParamName",
    "LR",
    "REG",
    "N_EPOCHS",
    "N_FACTORS",
    "RANDOM_STATE",
    "INIT_MEAN",
    "INIT_STD_DEV",
    "ALPHA",
    "SIMILARITY",
    "USE_FEATURE",
    "WELL_KNOWN_NAMES",
    "SIMILARITY_COSINE",
    "SIMILARITY_DOT",
    # Values
    "Kind",
    "Value",
    "Lookup",
    "LookupStatus",
    # Containers
    "Params",
    "ParamsGrid",
    # Errors
    "ParamKindError",
    "SerializationError",
]

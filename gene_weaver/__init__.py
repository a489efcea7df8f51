"""
Gene Weaver - 멘델 유전 확률 계산기

두 부모의 유전자형으로부터 퍼넷 사각형을 이용해
자손의 유전자형/표현형 확률을 계산하는 엔진
"""

from .models import (
    Phenotype,
    Gene,
    GenotypeResult,
    PhenotypeResult,
    CombinedPhenotypeResult,
    CrossResult,
    DihybridCrossResult,
    COAT_COLOR,
    TAIL_LENGTH,
    DEFAULT_GENES,
    get_gene
)

from .genetics import (
    GeneticsEngine
)

from .validator import (
    CrossValidator,
    ValidationReport,
    validate_cross
)

from .data_table import (
    ProbabilityTable,
    ProbabilityTableGenerator
)

from .visualizer import (
    SquareConfig,
    PunnettVisualizer,
)

from .config import (
    Settings,
    get_settings
)


__version__ = "1.0.0"
__all__ = [
    # Models
    "Phenotype",
    "Gene",
    "GenotypeResult",
    "PhenotypeResult",
    "CombinedPhenotypeResult",
    "CrossResult",
    "DihybridCrossResult",
    "COAT_COLOR",
    "TAIL_LENGTH",
    "DEFAULT_GENES",
    "get_gene",

    # Genetics
    "GeneticsEngine",

    # Validator
    "CrossValidator",
    "ValidationReport",
    "validate_cross",

    # Data Table
    "ProbabilityTable",
    "ProbabilityTableGenerator",

    # Visualizer
    "SquareConfig",
    "PunnettVisualizer",

    # Config
    "Settings",
    "get_settings",
]

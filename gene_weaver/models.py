"""
models.py - 핵심 데이터 모델 정의
Gene, 교배 결과(CrossResult) 클래스
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Tuple


class Phenotype(Enum):
    """표현형 정의"""
    DOMINANT = "dominant"      # 우성 표현형
    RECESSIVE = "recessive"    # 열성 표현형


@dataclass
class Gene:
    """
    유전자(형질) 클래스
    - symbol: 유전자 기호 (예: 'B', 'A')
    - dominant_allele: 우성 대립유전자 (예: 'B')
    - recessive_allele: 열성 대립유전자 (예: 'b')
    - trait_name: 형질 이름
    - dominant_phenotype / recessive_phenotype: 표현형 표시 이름
    """
    symbol: str
    dominant_allele: str
    recessive_allele: str
    trait_name: str = ""
    dominant_phenotype: str = "Dominant"
    recessive_phenotype: str = "Recessive"

    def __post_init__(self):
        # 우성은 대문자, 열성은 소문자로 통일
        self.dominant_allele = self.dominant_allele.upper()
        self.recessive_allele = self.recessive_allele.lower()
        if not self.trait_name:
            self.trait_name = self.symbol

    @property
    def alleles(self) -> Tuple[str, str]:
        """가능한 대립유전자 반환"""
        return (self.dominant_allele, self.recessive_allele)

    @property
    def genotypes(self) -> List[str]:
        """정규화된 유전자형 3가지 (우성 동형, 이형, 열성 동형)"""
        D, R = self.alleles
        return [D + D, D + R, R + R]

    @property
    def accepted_genotypes(self) -> List[str]:
        """입력으로 허용되는 유전자형 (이형접합 두 표기 모두 포함)"""
        D, R = self.alleles
        return [D + D, D + R, R + D, R + R]

    def phenotype_label(self, phenotype: Phenotype) -> str:
        """표현형 표시 이름"""
        if phenotype == Phenotype.DOMINANT:
            return self.dominant_phenotype
        return self.recessive_phenotype


# 기본 제공 형질
COAT_COLOR = Gene(
    symbol='B',
    dominant_allele='B',
    recessive_allele='b',
    trait_name='Coat color',
    dominant_phenotype='Black',
    recessive_phenotype='White'
)

TAIL_LENGTH = Gene(
    symbol='A',
    dominant_allele='A',
    recessive_allele='a',
    trait_name='Tail length',
    dominant_phenotype='Long',
    recessive_phenotype='Short'
)

DEFAULT_GENES: Dict[str, Gene] = {
    COAT_COLOR.symbol: COAT_COLOR,
    TAIL_LENGTH.symbol: TAIL_LENGTH,
}


def get_gene(symbol: str) -> Gene:
    """기호로 기본 형질 조회 (없으면 KeyError)"""
    return DEFAULT_GENES[symbol.upper()]


@dataclass(frozen=True)
class GenotypeResult:
    """자손 유전자형 확률"""
    genotype: str
    probability: float

    def to_dict(self) -> Dict:
        return {'genotype': self.genotype, 'probability': self.probability}


@dataclass(frozen=True)
class PhenotypeResult:
    """자손 표현형 확률"""
    phenotype: str
    probability: float

    def to_dict(self) -> Dict:
        return {'phenotype': self.phenotype, 'probability': self.probability}


@dataclass(frozen=True)
class CombinedPhenotypeResult:
    """두 형질 조합 표현형 확률"""
    phenotype: str
    probability: float
    description: str = ""

    def to_dict(self) -> Dict:
        return {
            'phenotype': self.phenotype,
            'probability': self.probability,
            'description': self.description
        }


@dataclass(frozen=True)
class CrossResult:
    """
    단일 형질 교배 결과
    - genotype_results: 정규화된 유전자형 순서 (우성 동형 → 열성 동형)
    - phenotype_results: 우성, 열성 순서로 항상 2개
    """
    gene: Gene
    parent1_genotype: str
    parent2_genotype: str
    genotype_results: List[GenotypeResult] = field(default_factory=list)
    phenotype_results: List[PhenotypeResult] = field(default_factory=list)

    @property
    def genotype_distribution(self) -> Dict[str, float]:
        return {r.genotype: r.probability for r in self.genotype_results}

    @property
    def phenotype_distribution(self) -> Dict[str, float]:
        return {r.phenotype: r.probability for r in self.phenotype_results}

    def to_dict(self) -> Dict:
        return {
            'genotypeResults': [r.to_dict() for r in self.genotype_results],
            'phenotypeResults': [r.to_dict() for r in self.phenotype_results]
        }


@dataclass(frozen=True)
class DihybridCrossResult:
    """두 형질(독립 유전) 교배 결과"""
    first: CrossResult
    second: CrossResult
    combined_results: List[CombinedPhenotypeResult] = field(default_factory=list)

    def to_dict(self) -> Dict:
        traits = []
        for result in (self.first, self.second):
            entry = {
                'symbol': result.gene.symbol,
                'name': result.gene.trait_name,
                'parent1Genotype': result.parent1_genotype,
                'parent2Genotype': result.parent2_genotype,
            }
            entry.update(result.to_dict())
            traits.append(entry)

        return {
            'traits': traits,
            'combinedPhenotypeResults': [r.to_dict() for r in self.combined_results]
        }

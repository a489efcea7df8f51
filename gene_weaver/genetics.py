"""
genetics.py - 멘델 유전 법칙 구현
퍼넷 사각형으로 자손 유전자형/표현형 확률 계산
"""

from typing import List, Dict, Tuple
from itertools import product

from .models import (
    Gene, Phenotype,
    GenotypeResult, PhenotypeResult, CombinedPhenotypeResult,
    CrossResult, DihybridCrossResult
)


class GeneticsEngine:
    """멘델 유전학 엔진 (상태 없음, 모든 연산은 순수 함수)"""

    @staticmethod
    def normalize_genotype(genotype: str) -> str:
        """
        유전자형 정규화 (우성 대립유전자를 앞에 배치)
        대문자가 소문자보다 앞에 정렬되므로 'bB' -> 'Bb'
        """
        return ''.join(sorted(genotype))

    @staticmethod
    def extract_gametes(genotype: str) -> List[str]:
        """유전자형에서 배우자 추출: Bb -> B, b / BB -> B, B"""
        return list(genotype)

    @staticmethod
    def punnett_square(genotype_a: str, genotype_b: str) -> List[List[str]]:
        """
        퍼넷 사각형 생성
        행: 부모 A의 배우자, 열: 부모 B의 배우자
        """
        gametes_a = GeneticsEngine.extract_gametes(genotype_a)
        gametes_b = GeneticsEngine.extract_gametes(genotype_b)

        return [
            [GeneticsEngine.normalize_genotype(a + b) for b in gametes_b]
            for a in gametes_a
        ]

    @staticmethod
    def compute_genotype_distribution(genotype_a: str, genotype_b: str) -> Dict[str, float]:
        """
        자손 유전자형 확률 분포

        Args:
            genotype_a: 부모 1 유전자형 (검증된 입력)
            genotype_b: 부모 2 유전자형 (검증된 입력)

        Returns:
            {정규화된 유전자형: 확률} (1~3개, 확률은 1/4 단위)
        """
        gametes_a = GeneticsEngine.extract_gametes(genotype_a)
        gametes_b = GeneticsEngine.extract_gametes(genotype_b)
        total = len(gametes_a) * len(gametes_b)

        counts: Dict[str, int] = {}
        for a, b in product(gametes_a, gametes_b):
            offspring = GeneticsEngine.normalize_genotype(a + b)
            counts[offspring] = counts.get(offspring, 0) + 1

        return {genotype: counts[genotype] / total for genotype in sorted(counts)}

    @staticmethod
    def compute_phenotype_distribution(
        distribution: Dict[str, float],
        dominant_allele: str
    ) -> Dict[Phenotype, float]:
        """유전자형 분포 -> 표현형 분포 (우성 대립유전자가 하나라도 있으면 우성)"""
        phenotypes = {Phenotype.DOMINANT: 0.0, Phenotype.RECESSIVE: 0.0}

        for genotype, probability in distribution.items():
            if dominant_allele in genotype:
                phenotypes[Phenotype.DOMINANT] += probability
            else:
                phenotypes[Phenotype.RECESSIVE] += probability

        return phenotypes

    @staticmethod
    def calculate_offspring_probabilities(
        gene: Gene,
        parent1_genotype: str,
        parent2_genotype: str
    ) -> CrossResult:
        """단일 형질 교배 결과 계산"""
        genotypes = GeneticsEngine.compute_genotype_distribution(
            parent1_genotype, parent2_genotype
        )
        phenotypes = GeneticsEngine.compute_phenotype_distribution(
            genotypes, gene.dominant_allele
        )

        return CrossResult(
            gene=gene,
            parent1_genotype=parent1_genotype,
            parent2_genotype=parent2_genotype,
            genotype_results=[
                GenotypeResult(genotype=g, probability=p)
                for g, p in genotypes.items()
            ],
            phenotype_results=[
                PhenotypeResult(
                    phenotype=gene.phenotype_label(phenotype),
                    probability=phenotypes[phenotype]
                )
                for phenotype in (Phenotype.DOMINANT, Phenotype.RECESSIVE)
            ]
        )

    @staticmethod
    def combine_phenotype_distributions(
        first: Dict[Phenotype, float],
        second: Dict[Phenotype, float]
    ) -> List[Tuple[Phenotype, Phenotype, float]]:
        """
        독립 유전 가정하에 두 형질의 표현형 확률 곱
        순서: (우,우), (우,열), (열,우), (열,열)
        """
        order = (Phenotype.DOMINANT, Phenotype.RECESSIVE)
        return [
            (p1, p2, first[p1] * second[p2])
            for p1, p2 in product(order, order)
        ]

    @staticmethod
    def calculate_dihybrid_probabilities(
        first_gene: Gene,
        first_parents: Tuple[str, str],
        second_gene: Gene,
        second_parents: Tuple[str, str]
    ) -> DihybridCrossResult:
        """두 형질 교배 결과 계산 (9:3:3:1 등)"""
        first = GeneticsEngine.calculate_offspring_probabilities(first_gene, *first_parents)
        second = GeneticsEngine.calculate_offspring_probabilities(second_gene, *second_parents)

        first_phenotypes = GeneticsEngine.compute_phenotype_distribution(
            first.genotype_distribution, first_gene.dominant_allele
        )
        second_phenotypes = GeneticsEngine.compute_phenotype_distribution(
            second.genotype_distribution, second_gene.dominant_allele
        )

        combined = []
        for p1, p2, probability in GeneticsEngine.combine_phenotype_distributions(
            first_phenotypes, second_phenotypes
        ):
            label1 = first_gene.phenotype_label(p1)
            label2 = second_gene.phenotype_label(p2)
            combined.append(CombinedPhenotypeResult(
                phenotype=f"{label1}, {label2}",
                probability=probability,
                description=(f"{first_gene.trait_name} is {label1.lower()} and "
                             f"{second_gene.trait_name.lower()} is {label2.lower()}")
            ))

        return DihybridCrossResult(first=first, second=second, combined_results=combined)

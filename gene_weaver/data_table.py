"""
data_table.py - 확률 표 생성기
유전자형/표현형/조합 표현형 확률을 표 데이터로 변환
"""

from typing import List, Dict, Any
from dataclasses import dataclass, field

from .models import CrossResult, DihybridCrossResult
from .genetics import GeneticsEngine


def format_percent(probability: float) -> str:
    """확률을 정수 백분율 문자열로 (0.75 -> '75%')"""
    return f"{probability * 100:.0f}%"


@dataclass
class ProbabilityRow:
    """확률 표의 한 행"""
    cells: List[str]
    probability: float

    @property
    def percent(self) -> str:
        return format_percent(self.probability)


@dataclass
class ProbabilityTable:
    """확률 표 전체"""
    title: str
    columns: List[str] = field(default_factory=list)
    rows: List[ProbabilityRow] = field(default_factory=list)

    def add_row(self, cells: List[str], probability: float):
        self.rows.append(ProbabilityRow(cells=cells, probability=probability))

    @property
    def total(self) -> float:
        return sum(r.probability for r in self.rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'columns': self.columns,
            'rows': [
                dict(zip(self.columns, row.cells + [row.percent]))
                for row in self.rows
            ]
        }

    def to_markdown(self) -> str:
        """마크다운 표 형식으로 변환"""
        if not self.rows:
            return ""

        header_line = "| " + " | ".join(self.columns) + " |"
        separator = "|" + "|".join(["---"] * len(self.columns)) + "|"

        data_lines = [
            "| " + " | ".join(row.cells + [row.percent]) + " |"
            for row in self.rows
        ]

        return "\n".join([f"**{self.title}**", "", header_line, separator] + data_lines)


class ProbabilityTableGenerator:
    """
    확률 표 생성기
    교배 결과 객체에서 표시용 표 데이터 생성
    """

    def genotype_table(self, result: CrossResult) -> ProbabilityTable:
        """유전자형 확률 표 (유전자형, 표현형, 확률)"""
        gene = result.gene
        table = ProbabilityTable(
            title=f"{gene.trait_name} ({gene.dominant_allele}/{gene.recessive_allele}): offspring genotypes",
            columns=["Genotype", "Phenotype", "Probability"]
        )
        for r in result.genotype_results:
            label = (gene.dominant_phenotype if gene.dominant_allele in r.genotype
                     else gene.recessive_phenotype)
            table.add_row([r.genotype, label], r.probability)
        return table

    def phenotype_table(self, result: CrossResult) -> ProbabilityTable:
        """표현형 확률 표"""
        table = ProbabilityTable(
            title=f"{result.gene.trait_name}: offspring phenotypes",
            columns=["Phenotype", "Probability"]
        )
        for r in result.phenotype_results:
            table.add_row([r.phenotype], r.probability)
        return table

    def combined_table(self, result: DihybridCrossResult) -> ProbabilityTable:
        """두 형질 조합 표현형 확률 표"""
        table = ProbabilityTable(
            title="Combined phenotypes",
            columns=["Phenotype", "Description", "Probability"]
        )
        for r in result.combined_results:
            table.add_row([r.phenotype, r.description], r.probability)
        return table

    def punnett_markdown(self, result: CrossResult) -> str:
        """퍼넷 사각형 마크다운 (행: 부모 1, 열: 부모 2)"""
        grid = GeneticsEngine.punnett_square(result.parent1_genotype, result.parent2_genotype)
        cols = GeneticsEngine.extract_gametes(result.parent2_genotype)
        rows = GeneticsEngine.extract_gametes(result.parent1_genotype)

        lines = [
            "| P1\\P2 | " + " | ".join(cols) + " |",
            "|" + "|".join(["---"] * (len(cols) + 1)) + "|",
        ]
        for allele, cells in zip(rows, grid):
            lines.append(f"| {allele} | " + " | ".join(cells) + " |")
        return "\n".join(lines)

    def create_result_tables(self, result) -> List[ProbabilityTable]:
        """결과 종류에 맞는 표 목록"""
        if isinstance(result, DihybridCrossResult):
            return [
                self.genotype_table(result.first),
                self.genotype_table(result.second),
                self.phenotype_table(result.first),
                self.phenotype_table(result.second),
                self.combined_table(result),
            ]
        return [self.genotype_table(result), self.phenotype_table(result)]

"""
validator.py - 검증 모듈
요청 입력 검증 및 계산 결과의 확률 정합성 검증
"""

import math
from typing import List, Dict, Optional, Sequence
from dataclasses import dataclass, field
from enum import Enum

from .models import Gene, CrossResult


TOLERANCE = 1e-10

PARENT_FIELDS = ('parent1Genotype', 'parent2Genotype')


class ValidationLevel(Enum):
    """검증 레벨"""
    ERROR = "ERROR"      # 치명적 오류 (계산 불가)
    WARNING = "WARNING"  # 경고
    INFO = "INFO"        # 정보


@dataclass
class ValidationResult:
    """검증 결과"""
    is_valid: bool
    level: ValidationLevel
    message: str
    details: Dict = field(default_factory=dict)

    def __str__(self):
        return f"[{self.level.value}] {self.message}"


@dataclass
class ValidationReport:
    """전체 검증 보고서"""
    results: List[ValidationResult] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """에러가 없으면 유효"""
        return not any(
            r.level == ValidationLevel.ERROR and not r.is_valid
            for r in self.results
        )

    @property
    def error_count(self) -> int:
        return len(self.get_errors())

    def add_result(self, result: ValidationResult):
        self.results.append(result)

    def add_error(self, message: str, **details):
        self.add_result(ValidationResult(
            is_valid=False,
            level=ValidationLevel.ERROR,
            message=message,
            details=details
        ))

    def get_errors(self) -> List[ValidationResult]:
        return [r for r in self.results
                if r.level == ValidationLevel.ERROR and not r.is_valid]

    @property
    def first_error(self) -> Optional[str]:
        errors = self.get_errors()
        return errors[0].message if errors else None

    def to_dict(self) -> Dict:
        return {
            'is_valid': self.is_valid,
            'error_count': self.error_count,
            'results': [
                {
                    'valid': r.is_valid,
                    'level': r.level.value,
                    'message': r.message,
                    'details': r.details
                }
                for r in self.results
            ]
        }

    def __str__(self):
        lines = [
            "=== 검증 보고서 ===",
            f"전체 결과: {'✓ 유효' if self.is_valid else '✗ 무효'}",
            f"오류: {self.error_count}",
        ]
        for r in self.results:
            status = "✓" if r.is_valid else "✗"
            lines.append(f"  {status} [{r.level.value}] {r.message}")
        return "\n".join(lines)


def _format_accepted(gene: Gene) -> str:
    accepted = gene.accepted_genotypes
    return ", ".join(accepted[:-1]) + f", or {accepted[-1]}"


class CrossValidator:
    """
    교배 계산 검증 클래스

    검증 항목:
    1. 필수 입력 존재 여부
    2. 유전자형 형식 (허용된 4가지 표기)
    3. 계산 결과의 확률 합 및 우열 분할
    """

    def validate_request(
        self,
        data: Dict,
        gene: Gene,
        fields: Sequence[str] = PARENT_FIELDS
    ) -> ValidationReport:
        """
        요청 입력 검증

        Args:
            data: 요청 본문 (JSON 또는 폼)
            gene: 대상 형질
            fields: 부모 유전자형 필드 이름

        Returns:
            ValidationReport 객체
        """
        report = ValidationReport()

        missing = [name for name in fields if not data.get(name)]
        if missing:
            report.add_error(
                f"Both {' and '.join(fields)} are required",
                missing=missing
            )
            return report

        accepted = gene.accepted_genotypes
        invalid = [name for name in fields if data.get(name) not in accepted]
        if invalid:
            report.add_error(
                f"Invalid genotype format. Must be {_format_accepted(gene)}",
                invalid={name: data.get(name) for name in invalid},
                gene=gene.symbol
            )
            return report

        report.add_result(ValidationResult(
            is_valid=True,
            level=ValidationLevel.INFO,
            message="입력 검증 통과"
        ))
        return report

    def validate_genotypes(self, genotypes: Sequence[str], gene: Gene) -> ValidationReport:
        """유전자형 목록 검증 (CLI 등 필드 이름이 없는 입력용)"""
        data = {f"parent{i + 1}Genotype": g for i, g in enumerate(genotypes)}
        return self.validate_request(data, gene, fields=tuple(data))

    def validate_result(self, result: CrossResult) -> ValidationReport:
        """계산 결과 확률 정합성 검증"""
        report = ValidationReport()
        gene = result.gene
        genotypes = result.genotype_distribution

        # 1. 유전자형 키는 정규화된 3가지 중 하나
        unknown = [g for g in genotypes if g not in gene.genotypes]
        if unknown:
            report.add_error(
                f"정규화되지 않은 유전자형: {', '.join(unknown)}",
                genotypes=unknown
            )

        # 2. 확률 합 = 1
        genotype_total = sum(genotypes.values())
        if not math.isclose(genotype_total, 1.0, abs_tol=TOLERANCE):
            report.add_error(
                f"유전자형 확률 합이 1이 아님: {genotype_total}",
                total=genotype_total
            )

        phenotype_total = sum(r.probability for r in result.phenotype_results)
        if not math.isclose(phenotype_total, 1.0, abs_tol=TOLERANCE):
            report.add_error(
                f"표현형 확률 합이 1이 아님: {phenotype_total}",
                total=phenotype_total
            )

        # 3. 우열 분할: 우성 = 우성 대립유전자 포함 유전자형 합, 열성 = 열성 동형
        # 표현형 결과는 (우성, 열성) 순서 (표시 이름이 같을 수 있으므로 위치로 비교)
        if len(result.phenotype_results) != 2:
            report.add_error(
                f"표현형 결과는 2개여야 함: {len(result.phenotype_results)}",
                count=len(result.phenotype_results)
            )
            return report

        expected_dominant = sum(
            p for g, p in genotypes.items() if gene.dominant_allele in g
        )
        expected_recessive = genotypes.get(gene.recessive_allele * 2, 0.0)
        dominant, recessive = (r.probability for r in result.phenotype_results)

        if not (math.isclose(dominant, expected_dominant, abs_tol=TOLERANCE)
                and math.isclose(recessive, expected_recessive, abs_tol=TOLERANCE)):
            report.add_error(
                "표현형 분포가 유전자형 분포의 우열 분할과 일치하지 않음",
                dominant=dominant,
                recessive=recessive,
                expected_dominant=expected_dominant,
                expected_recessive=expected_recessive
            )

        if report.is_valid:
            report.add_result(ValidationResult(
                is_valid=True,
                level=ValidationLevel.INFO,
                message=f"{gene.symbol} 확률 검증 통과"
            ))

        return report


def validate_cross(data: Dict, gene: Gene) -> ValidationReport:
    """
    편의 함수: 교배 요청 입력 검증

    Args:
        data: 요청 본문
        gene: 대상 형질

    Returns:
        ValidationReport 객체
    """
    validator = CrossValidator()
    return validator.validate_request(data, gene)

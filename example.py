"""
Gene Weaver - 사용 예시
다양한 교배 시나리오
"""

from gene_weaver import (
    Gene,
    GeneticsEngine,
    CrossValidator,
    ProbabilityTableGenerator,
    COAT_COLOR, TAIL_LENGTH
)


def example_1_monohybrid():
    """
    예시 1: 단일 형질 이형접합 교배 (Bb x Bb)
    - 유전자형 1:2:1, 표현형 3:1
    """
    print("\n" + "="*60)
    print("예시 1: 단일 형질 교배 (Bb x Bb)")
    print("="*60)

    result = GeneticsEngine.calculate_offspring_probabilities(COAT_COLOR, 'Bb', 'Bb')

    table_gen = ProbabilityTableGenerator()
    print(table_gen.punnett_markdown(result))
    print()
    for table in table_gen.create_result_tables(result):
        print(table.to_markdown())
        print()


def example_2_dihybrid():
    """
    예시 2: 두 형질 교배 (BbAa x BbAa)
    - 독립 유전: 9:3:3:1
    """
    print("\n" + "="*60)
    print("예시 2: 두 형질 교배 (BbAa x BbAa)")
    print("="*60)

    result = GeneticsEngine.calculate_dihybrid_probabilities(
        COAT_COLOR, ('Bb', 'Bb'),
        TAIL_LENGTH, ('Aa', 'Aa')
    )

    for r in result.combined_results:
        print(f"  {r.phenotype}: {r.probability:.4f}")


def example_3_custom_gene():
    """
    예시 3: 사용자 정의 형질 + 입력 검증
    - 비정규 표기(rR)도 정규화되어 계산됨
    """
    print("\n" + "="*60)
    print("예시 3: 사용자 정의 형질 (완두 모양 R/r)")
    print("="*60)

    gene_r = Gene(
        symbol='R',
        dominant_allele='R',
        recessive_allele='r',
        trait_name='Seed shape',
        dominant_phenotype='Round',
        recessive_phenotype='Wrinkled'
    )

    validator = CrossValidator()
    for p1, p2 in [('rR', 'rr'), ('RX', 'rr')]:
        report = validator.validate_genotypes([p1, p2], gene_r)
        if not report.is_valid:
            print(f"  {p1} x {p2}: ✗ {report.first_error}")
            continue

        result = GeneticsEngine.calculate_offspring_probabilities(gene_r, p1, p2)
        print(f"  {p1} x {p2}: {result.genotype_distribution} "
              f"{result.phenotype_distribution}")


if __name__ == "__main__":
    example_1_monohybrid()
    example_2_dihybrid()
    example_3_custom_gene()

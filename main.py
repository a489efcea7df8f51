"""
Gene Weaver - 멘델 유전 확률 계산기
메인 실행 파일

사용법:
    python main.py --parent1 Bb --parent2 Bb              # 단일 형질
    python main.py --parent1 Aa --parent2 aa --traits A   # 형질 지정
    python main.py --parent1 Bb Aa --parent2 Bb Aa        # 두 형질 (9:3:3:1)
    python main.py --parent1 Bb --parent2 bb --save --image
"""

import argparse
import json
import os
from datetime import datetime
from typing import List, Optional

from gene_weaver import (
    Gene,
    GeneticsEngine,
    CrossValidator,
    ProbabilityTableGenerator,
    PunnettVisualizer,
    DihybridCrossResult,
    get_gene
)


class GeneWeaver:
    """
    Gene Weaver 메인 클래스
    교배 확률 계산, 출력, 저장
    """

    def __init__(self):
        self.validator = CrossValidator()
        self.table_generator = ProbabilityTableGenerator()
        self.visualizer = PunnettVisualizer()

    def calculate(
        self,
        genes: List[Gene],
        parent1: List[str],
        parent2: List[str]
    ) -> dict:
        """
        교배 확률 계산

        Args:
            genes: 형질 목록 (1개 또는 2개)
            parent1: 부모 1 유전자형 (형질 순서)
            parent2: 부모 2 유전자형 (형질 순서)

        Returns:
            결과 데이터 딕셔너리
        """
        print(f"\n{'='*50}")
        print("🧬 Gene Weaver - 자손 확률 계산 중...")
        print(f"{'='*50}")
        for gene, g1, g2 in zip(genes, parent1, parent2):
            print(f"{gene.trait_name} ({gene.symbol}): {g1} x {g2}")
        print()

        # 입력 검증
        for gene, g1, g2 in zip(genes, parent1, parent2):
            report = self.validator.validate_genotypes([g1, g2], gene)
            if not report.is_valid:
                print(f"❌ 입력 오류: {report.first_error}")
                return {'success': False, 'error': report.first_error}

        if len(genes) == 1:
            result = GeneticsEngine.calculate_offspring_probabilities(
                genes[0], parent1[0], parent2[0]
            )
            crosses = [result]
        else:
            result = GeneticsEngine.calculate_dihybrid_probabilities(
                genes[0], (parent1[0], parent2[0]),
                genes[1], (parent1[1], parent2[1])
            )
            crosses = [result.first, result.second]

        # 결과 검증
        for cross in crosses:
            report = self.validator.validate_result(cross)
            print(f"✓ {cross.gene.symbol} 확률 검증: {'통과' if report.is_valid else '실패'}")
            if not report.is_valid:
                return {
                    'success': False,
                    'error': '확률 검증 실패',
                    'validation': report.to_dict()
                }

        print(f"\n{'='*50}")
        print("✅ 계산 완료!")
        print(f"{'='*50}")

        return {
            'success': True,
            'timestamp': datetime.now().isoformat(),
            'result': result,
            'tables': self.table_generator.create_result_tables(result),
            'punnett': [self.table_generator.punnett_markdown(c) for c in crosses]
        }

    def display_result(self, output: dict):
        """결과를 콘솔에 표시"""
        if not output.get('success'):
            print(f"❌ 오류: {output.get('error')}")
            return

        print("\n【퍼넷 사각형】")
        for square in output['punnett']:
            print(square)
            print()

        print("【확률 표】")
        for table in output['tables']:
            print(table.to_markdown())
            print()

    def save_result(self, output: dict, output_dir: str = "output", image: bool = False):
        """결과를 파일로 저장"""
        if not output.get('success'):
            print("❌ 저장할 결과가 없습니다.")
            return

        os.makedirs(output_dir, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base_name = f"cross_{timestamp}"

        result = output['result']
        json_data = {
            'timestamp': output['timestamp'],
            'result': result.to_dict(),
            'tables': [t.to_dict() for t in output['tables']]
        }
        json_path = os.path.join(output_dir, f"{base_name}.json")
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, ensure_ascii=False, indent=2)
        print(f"✓ JSON 저장: {json_path}")

        if image:
            crosses = ([result.first, result.second]
                       if isinstance(result, DihybridCrossResult) else [result])
            for cross in crosses:
                img_path = os.path.join(output_dir, f"{base_name}_{cross.gene.symbol}.png")
                self.visualizer.save_to_file(
                    cross.gene, cross.parent1_genotype, cross.parent2_genotype, img_path
                )
                print(f"✓ 퍼넷 사각형 저장: {img_path}")


def parse_args(argv: Optional[List[str]] = None):
    """명령줄 인자 파싱"""
    parser = argparse.ArgumentParser(
        description="Gene Weaver - 멘델 유전 확률 계산기"
    )

    parser.add_argument(
        '--parent1', '-p1',
        nargs='+',
        required=True,
        help="부모 1 유전자형 (형질 순서, 예: Bb 또는 Bb Aa)"
    )

    parser.add_argument(
        '--parent2', '-p2',
        nargs='+',
        required=True,
        help="부모 2 유전자형 (형질 순서)"
    )

    parser.add_argument(
        '--traits', '-t',
        nargs='+',
        default=None,
        help="형질 기호 (기본: B 또는 B A)"
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default='output',
        help="출력 디렉토리 (기본: output)"
    )

    parser.add_argument(
        '--save',
        action='store_true',
        help="결과를 파일로 저장"
    )

    parser.add_argument(
        '--image',
        action='store_true',
        help="퍼넷 사각형 PNG 저장 (--save와 함께)"
    )

    parser.add_argument(
        '--no-display',
        action='store_true',
        help="콘솔 출력 생략"
    )

    args = parser.parse_args(argv)

    if len(args.parent1) != len(args.parent2) or len(args.parent1) > 2:
        parser.error("--parent1/--parent2 에 같은 개수(1 또는 2)의 유전자형을 지정하세요")

    if args.traits is None:
        args.traits = ['B', 'A'][:len(args.parent1)]
    if len(args.traits) != len(args.parent1):
        parser.error("--traits 개수가 유전자형 개수와 다릅니다")
    if len(set(t.upper() for t in args.traits)) != len(args.traits):
        parser.error("같은 형질을 두 번 지정할 수 없습니다")

    try:
        args.genes = [get_gene(t) for t in args.traits]
    except KeyError as e:
        parser.error(f"알 수 없는 형질: {e.args[0]}")

    return args


def main(argv: Optional[List[str]] = None):
    """메인 함수"""
    args = parse_args(argv)

    engine = GeneWeaver()

    output = engine.calculate(args.genes, args.parent1, args.parent2)

    # 출력
    if not args.no_display:
        engine.display_result(output)

    # 저장
    if args.save:
        engine.save_result(output, args.output, image=args.image)

    return 0 if output.get('success') else 1


if __name__ == "__main__":
    raise SystemExit(main())

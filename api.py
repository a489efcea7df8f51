"""
Gene Weaver - Flask REST API
자손 유전자형/표현형 확률 계산 API 엔드포인트

실행: flask --app api run --debug
또는: python api.py
"""

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

from gene_weaver import (
    GeneticsEngine, CrossValidator, PunnettVisualizer,
    DEFAULT_GENES, get_gene, get_settings
)

settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, origins=settings.cors_origin_list)  # CORS 활성화

# 전역 객체
validator = CrossValidator()
visualizer = PunnettVisualizer()

DIHYBRID_TRAITS = ('B', 'A')


def _request_data() -> dict:
    """JSON 또는 폼 본문을 딕셔너리로"""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _as_list(value) -> list:
    """리스트 또는 'Bb,Aa' 형태 문자열을 리스트로"""
    if isinstance(value, str):
        return [v.strip() for v in value.split(',') if v.strip()]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return []


def _bad_request(message: str, **extra):
    logger.warning("요청 거부: %s", message)
    body = {'error': message}
    body.update(extra)
    return jsonify(body), 400


def _server_error(e: Exception):
    logger.exception("확률 계산 실패")
    return jsonify({
        'error': 'An error occurred while calculating probabilities',
        'message': str(e)
    }), 500


def _check_results(*results):
    """계산 결과 검증, 실패 시 500 응답 반환"""
    for result in results:
        report = validator.validate_result(result)
        if not report.is_valid:
            logger.error("결과 검증 실패: %s", report)
            return jsonify({
                'error': 'Result validation failed',
                'validation': report.to_dict()
            }), 500
    return None


def _resolve_gene(data: dict):
    symbol = data.get('trait') or settings.default_trait
    try:
        return get_gene(str(symbol)), None
    except KeyError:
        return None, f"Unknown trait: {symbol}"


@app.route('/')
def index():
    """API 정보"""
    return jsonify({
        'name': settings.app_name,
        'version': settings.app_version,
        'description': 'Offspring genotype and phenotype probabilities (Punnett square)',
        'endpoints': {
            '/health': 'GET - 상태 확인',
            '/api/genetics/traits': 'GET - 사용 가능한 형질 목록',
            '/api/genetics/calculate': 'POST - 단일 형질 확률 계산',
            '/api/genetics/calculate-dihybrid': 'POST - 두 형질 조합 확률 계산',
            '/api/genetics/punnett-square': 'POST - 퍼넷 사각형 이미지'
        }
    })


@app.route('/health', methods=['GET'])
def health():
    """상태 확인"""
    return jsonify({'status': 'ok'})


@app.route('/api/genetics/traits', methods=['GET'])
def get_traits():
    """사용 가능한 형질 목록"""
    traits = [
        {
            'symbol': g.symbol,
            'name': g.trait_name,
            'dominant_allele': g.dominant_allele,
            'recessive_allele': g.recessive_allele,
            'dominant_phenotype': g.dominant_phenotype,
            'recessive_phenotype': g.recessive_phenotype,
            'genotypes': g.accepted_genotypes
        }
        for g in DEFAULT_GENES.values()
    ]
    return jsonify({'traits': traits})


@app.route('/api/genetics/calculate', methods=['POST'])
def calculate_probabilities():
    """
    자손 유전자형/표현형 확률 계산

    Request Body (JSON 또는 form):
    {
        "parent1Genotype": "Bb",   // BB, Bb, bB, bb
        "parent2Genotype": "Bb",
        "trait": "B"               // 형질 기호 (선택)
    }
    """
    try:
        data = _request_data()

        gene, error = _resolve_gene(data)
        if error:
            return _bad_request(error)

        # 입력 검증
        report = validator.validate_request(data, gene)
        if not report.is_valid:
            return _bad_request(report.first_error)

        result = GeneticsEngine.calculate_offspring_probabilities(
            gene, data['parent1Genotype'], data['parent2Genotype']
        )

        # 결과 검증
        invalid = _check_results(result)
        if invalid:
            return invalid

        logger.info("%s 교배 계산: %s x %s", gene.symbol,
                    data['parent1Genotype'], data['parent2Genotype'])
        return jsonify(result.to_dict())

    except Exception as e:
        return _server_error(e)


@app.route('/api/genetics/calculate-dihybrid', methods=['POST'])
def calculate_dihybrid():
    """
    두 형질(독립 유전) 조합 확률 계산

    Request Body:
    {
        "traits": ["B", "A"],             // 선택
        "parent1Genotypes": ["Bb", "Aa"],
        "parent2Genotypes": ["Bb", "Aa"]
    }
    """
    try:
        data = _request_data()

        symbols = _as_list(data.get('traits')) or list(DIHYBRID_TRAITS)
        parent1 = _as_list(data.get('parent1Genotypes'))
        parent2 = _as_list(data.get('parent2Genotypes'))

        if len(symbols) != 2 or symbols[0].upper() == symbols[1].upper():
            return _bad_request("traits must name two different traits")
        if len(parent1) != 2 or len(parent2) != 2:
            return _bad_request(
                "Both parent1Genotypes and parent2Genotypes are required "
                "(one genotype per trait)"
            )

        genes = []
        for i, symbol in enumerate(symbols):
            gene, error = _resolve_gene({'trait': symbol})
            if error:
                return _bad_request(error)

            report = validator.validate_request(
                {'parent1Genotype': parent1[i], 'parent2Genotype': parent2[i]}, gene
            )
            if not report.is_valid:
                return _bad_request(report.first_error, trait=gene.symbol)
            genes.append(gene)

        result = GeneticsEngine.calculate_dihybrid_probabilities(
            genes[0], (parent1[0], parent2[0]),
            genes[1], (parent1[1], parent2[1])
        )

        invalid = _check_results(result.first, result.second)
        if invalid:
            return invalid

        logger.info("두 형질 교배 계산: %s x %s", "".join(parent1), "".join(parent2))
        return jsonify(result.to_dict())

    except Exception as e:
        return _server_error(e)


@app.route('/api/genetics/punnett-square', methods=['POST'])
def punnett_square():
    """
    퍼넷 사각형 (격자 + PNG 이미지)

    Request Body: /api/genetics/calculate 와 동일
    """
    try:
        data = _request_data()

        gene, error = _resolve_gene(data)
        if error:
            return _bad_request(error)

        report = validator.validate_request(data, gene)
        if not report.is_valid:
            return _bad_request(report.first_error)

        p1, p2 = data['parent1Genotype'], data['parent2Genotype']
        image = visualizer.draw_punnett_square(gene, p1, p2)

        return jsonify({
            'grid': GeneticsEngine.punnett_square(p1, p2),
            'rows': GeneticsEngine.extract_gametes(p1),
            'columns': GeneticsEngine.extract_gametes(p2),
            'image': f"data:image/png;base64,{image}"
        })

    except Exception as e:
        return _server_error(e)


@app.errorhandler(404)
def not_found(e):
    return jsonify({'error': 'Not found'}), 404


@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({'error': 'Method not allowed'}), 405


if __name__ == '__main__':
    print("=" * 50)
    print(f"{settings.app_name} Server")
    print("=" * 50)
    print(f"Server starting at http://localhost:{settings.port}")
    print()
    app.run(debug=settings.debug, host=settings.host, port=settings.port)

import pytest

from api import app
from gene_weaver import CrossValidator, GeneticsEngine, ValidationReport


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def _calculate(client, p1, p2, **extra):
    body = {'parent1Genotype': p1, 'parent2Genotype': p2}
    body.update(extra)
    return client.post('/api/genetics/calculate', json=body)


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_index_lists_endpoints(client):
    data = client.get('/').get_json()
    assert '/api/genetics/calculate' in data['endpoints']


def test_traits(client):
    traits = client.get('/api/genetics/traits').get_json()['traits']
    assert {t['symbol'] for t in traits} == {'A', 'B'}


def test_calculate_heterozygous_cross(client):
    response = _calculate(client, 'Bb', 'Bb')
    assert response.status_code == 200

    data = response.get_json()
    phenotypes = {p['phenotype']: p['probability'] for p in data['phenotypeResults']}
    assert phenotypes == {'Black': 0.75, 'White': 0.25}

    genotypes = {g['genotype']: g['probability'] for g in data['genotypeResults']}
    assert genotypes == {'BB': 0.25, 'Bb': 0.5, 'bb': 0.25}


@pytest.mark.parametrize(
    "p1, p2, expected",
    [
        ('BB', 'BB', {'BB': 1.0}),
        ('BB', 'bb', {'Bb': 1.0}),
        ('bb', 'bb', {'bb': 1.0}),
        ('bB', 'BB', {'BB': 0.5, 'Bb': 0.5}),
    ],
)
def test_calculate_consistency(client, p1, p2, expected):
    data = _calculate(client, p1, p2).get_json()
    assert {g['genotype']: g['probability'] for g in data['genotypeResults']} == expected


def test_calculate_other_trait(client):
    data = _calculate(client, 'Aa', 'aa', trait='A').get_json()
    phenotypes = {p['phenotype']: p['probability'] for p in data['phenotypeResults']}
    assert phenotypes == {'Long': 0.5, 'Short': 0.5}


def test_form_encoded_body(client):
    response = client.post('/api/genetics/calculate',
                           data={'parent1Genotype': 'Bb', 'parent2Genotype': 'bb'})
    assert response.status_code == 200
    assert len(response.get_json()['phenotypeResults']) == 2


def test_missing_genotype(client):
    response = client.post('/api/genetics/calculate', json={'parent1Genotype': 'Bb'})
    assert response.status_code == 400
    assert 'required' in response.get_json()['error']


def test_invalid_genotype(client):
    response = _calculate(client, 'XY', 'Bb')
    assert response.status_code == 400
    assert response.get_json()['error'].startswith('Invalid genotype format')


def test_malformed_json(client):
    response = client.post('/api/genetics/calculate', data='{"parent1Genotype":',
                           content_type='application/json')
    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_unknown_trait(client):
    response = _calculate(client, 'Bb', 'Bb', trait='Z')
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Unknown trait: Z'}


def test_unknown_route_and_method(client):
    assert client.get('/api/genetics/unknown').status_code == 404
    response = client.get('/api/genetics/calculate')
    assert response.status_code == 405
    assert 'error' in response.get_json()


def test_cors_header(client):
    response = client.post('/api/genetics/calculate',
                           json={'parent1Genotype': 'Bb', 'parent2Genotype': 'Bb'},
                           headers={'Origin': 'http://localhost:3000'})
    assert response.status_code == 200
    assert 'Access-Control-Allow-Origin' in response.headers


def test_dihybrid(client):
    response = client.post('/api/genetics/calculate-dihybrid', json={
        'traits': ['B', 'A'],
        'parent1Genotypes': ['Bb', 'Aa'],
        'parent2Genotypes': ['bB', 'aA'],
    })
    assert response.status_code == 200

    data = response.get_json()
    combined = [c['probability'] for c in data['combinedPhenotypeResults']]
    assert combined == pytest.approx([0.5625, 0.1875, 0.1875, 0.0625])
    assert sum(combined) == pytest.approx(1.0, abs=1e-10)
    assert [t['symbol'] for t in data['traits']] == ['B', 'A']


def test_dihybrid_form_lists(client):
    response = client.post('/api/genetics/calculate-dihybrid', data={
        'parent1Genotypes': 'BB,aa',
        'parent2Genotypes': 'bb,aa',
    })
    assert response.status_code == 200
    combined = {c['phenotype']: c['probability']
                for c in response.get_json()['combinedPhenotypeResults']}
    assert combined['Black, Short'] == 1.0


def test_dihybrid_rejects_bad_input(client):
    response = client.post('/api/genetics/calculate-dihybrid', json={
        'parent1Genotypes': ['Bb'],
        'parent2Genotypes': ['Bb', 'Aa'],
    })
    assert response.status_code == 400
    assert 'required' in response.get_json()['error']

    response = client.post('/api/genetics/calculate-dihybrid', json={
        'parent1Genotypes': ['Bb', 'Bb'],
        'parent2Genotypes': ['Bb', 'Aa'],
    })
    assert response.status_code == 400
    assert response.get_json()['trait'] == 'A'

    response = client.post('/api/genetics/calculate-dihybrid', json={
        'traits': ['B', 'b'],
        'parent1Genotypes': ['Bb', 'Bb'],
        'parent2Genotypes': ['Bb', 'Bb'],
    })
    assert response.status_code == 400


def test_punnett_square(client):
    response = client.post('/api/genetics/punnett-square',
                           json={'parent1Genotype': 'Bb', 'parent2Genotype': 'bb'})
    assert response.status_code == 200

    data = response.get_json()
    assert data['grid'] == [['Bb', 'Bb'], ['bb', 'bb']]
    assert data['rows'] == ['B', 'b']
    assert data['image'].startswith('data:image/png;base64,')


def test_punnett_square_invalid(client):
    response = client.post('/api/genetics/punnett-square', json={'parent1Genotype': 'Bb'})
    assert response.status_code == 400


def test_unexpected_error_returns_500(client, monkeypatch):
    def explode(gene, p1, p2):
        raise RuntimeError('boom')

    monkeypatch.setattr(GeneticsEngine, 'calculate_offspring_probabilities', explode)

    response = _calculate(client, 'Bb', 'Bb')
    assert response.status_code == 500
    assert response.get_json() == {
        'error': 'An error occurred while calculating probabilities',
        'message': 'boom',
    }


def _failing_report(self, result):
    report = ValidationReport()
    report.add_error('broken distribution')
    return report


def test_result_validation_failure_returns_500(client, monkeypatch):
    monkeypatch.setattr(CrossValidator, 'validate_result', _failing_report)

    response = _calculate(client, 'Bb', 'Bb')
    assert response.status_code == 500

    data = response.get_json()
    assert data['error'] == 'Result validation failed'
    assert data['validation']['is_valid'] is False
    assert data['validation']['results'][0]['message'] == 'broken distribution'


def test_dihybrid_checks_each_trait_result(client, monkeypatch):
    checked = []

    def record(self, result):
        checked.append(result.gene.symbol)
        return _failing_report(self, result)

    monkeypatch.setattr(CrossValidator, 'validate_result', record)

    response = client.post('/api/genetics/calculate-dihybrid', json={
        'parent1Genotypes': ['Bb', 'Aa'],
        'parent2Genotypes': ['Bb', 'Aa'],
    })
    assert response.status_code == 500
    assert response.get_json()['error'] == 'Result validation failed'
    assert checked == ['B']

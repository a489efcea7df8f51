import json

import pytest

from main import GeneWeaver, main, parse_args
from gene_weaver.models import COAT_COLOR, TAIL_LENGTH


def test_parse_args_defaults_traits():
    args = parse_args(['--parent1', 'Bb', '--parent2', 'bb'])
    assert args.traits == ['B']
    assert args.genes == [COAT_COLOR]

    args = parse_args(['--parent1', 'Bb', 'Aa', '--parent2', 'Bb', 'Aa'])
    assert args.genes == [COAT_COLOR, TAIL_LENGTH]


@pytest.mark.parametrize(
    "argv",
    [
        ['--parent1', 'Bb', 'Aa', '--parent2', 'Bb'],
        ['--parent1', 'Bb', '--parent2', 'Bb', '--traits', 'Z'],
        ['--parent1', 'Bb', 'Bb', '--parent2', 'Bb', 'Bb', '--traits', 'B', 'B'],
    ],
)
def test_parse_args_errors(argv):
    with pytest.raises(SystemExit) as excinfo:
        parse_args(argv)
    assert excinfo.value.code == 2


def test_calculate_single_trait(capsys):
    output = GeneWeaver().calculate([COAT_COLOR], ['Bb'], ['Bb'])
    assert output['success']
    assert output['result'].phenotype_distribution == {'Black': 0.75, 'White': 0.25}
    assert len(output['tables']) == 2

    GeneWeaver().display_result(output)
    assert '| Black | 75% |' in capsys.readouterr().out


def test_calculate_rejects_invalid_genotype():
    output = GeneWeaver().calculate([COAT_COLOR], ['Bx'], ['Bb'])
    assert not output['success']
    assert output['error'].startswith('Invalid genotype format')


def test_main_saves_json_and_images(tmp_path):
    code = main(['--parent1', 'Bb', 'Aa', '--parent2', 'bb', 'Aa',
                 '--save', '--image', '--no-display', '--output', str(tmp_path)])
    assert code == 0

    json_files = list(tmp_path.glob('*.json'))
    assert len(json_files) == 1
    data = json.loads(json_files[0].read_text(encoding='utf-8'))
    assert len(data['result']['combinedPhenotypeResults']) == 4

    assert len(list(tmp_path.glob('*.png'))) == 2


def test_main_invalid_genotype_returns_error_status():
    assert main(['--parent1', 'XX', '--parent2', 'Bb', '--no-display']) == 1

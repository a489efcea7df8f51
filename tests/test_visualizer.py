import base64

from gene_weaver.genetics import GeneticsEngine
from gene_weaver.models import COAT_COLOR
from gene_weaver.visualizer import PunnettVisualizer, SquareConfig

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


def test_punnett_square_is_png():
    visualizer = PunnettVisualizer(SquareConfig(dpi=50))
    image = visualizer.draw_punnett_square(COAT_COLOR, 'Bb', 'bb', title='Bb x bb')
    assert base64.b64decode(image).startswith(PNG_SIGNATURE)


def test_probability_chart_is_png():
    result = GeneticsEngine.calculate_offspring_probabilities(COAT_COLOR, 'Bb', 'Bb')
    image = PunnettVisualizer(SquareConfig(dpi=50)).draw_probability_chart(result)
    assert base64.b64decode(image).startswith(PNG_SIGNATURE)


def test_save_to_file(tmp_path):
    path = tmp_path / 'square.png'
    PunnettVisualizer(SquareConfig(dpi=50)).save_to_file(COAT_COLOR, 'BB', 'bb', str(path))
    assert path.read_bytes().startswith(PNG_SIGNATURE)

"""
visualizer.py - 퍼넷 사각형 / 확률 막대그래프 시각화
matplotlib(Agg)로 그린 뒤 base64 PNG 문자열로 반환
"""

import io
import base64
import numpy as np
from typing import Optional
from dataclasses import dataclass

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .models import Gene, CrossResult
from .genetics import GeneticsEngine


# ============================================================
# 설정값
# ============================================================
@dataclass
class SquareConfig:
    # 캔버스
    fig_width: float = 5.0
    fig_height: float = 5.0
    dpi: int = 150

    # 칸 크기
    cell_size: float = 1.0
    line_width: float = 1.5
    edge_color: str = 'black'

    # 색상 팔레트 (원본 표의 배경색)
    color_dominant: str = '#B3D8FF'
    color_recessive: str = '#FFCEC8'
    color_header: str = '#EEEEEE'
    color_bar: str = '#7FB3E6'

    font_size_cell: int = 18
    font_size_header: int = 16


# ============================================================
# 시각화 엔진
# ============================================================
class PunnettVisualizer:
    def __init__(self, config: Optional[SquareConfig] = None):
        self.config = config or SquareConfig()

    def draw_punnett_square(
        self,
        gene: Gene,
        parent1_genotype: str,
        parent2_genotype: str,
        title: str = "",
        save_path: Optional[str] = None
    ) -> str:
        """퍼넷 사각형 그리기 (행: 부모 1 배우자, 열: 부모 2 배우자)"""
        cfg = self.config
        grid = GeneticsEngine.punnett_square(parent1_genotype, parent2_genotype)
        rows = GeneticsEngine.extract_gametes(parent1_genotype)
        cols = GeneticsEngine.extract_gametes(parent2_genotype)

        fig, ax = plt.subplots(figsize=(cfg.fig_width, cfg.fig_height))
        sz = cfg.cell_size
        n_rows, n_cols = len(rows), len(cols)

        # 헤더 (배우자)
        for j, allele in enumerate(cols):
            self._draw_cell(ax, (j + 1) * sz, n_rows * sz, allele,
                            cfg.color_header, cfg.font_size_header)
        for i, allele in enumerate(rows):
            self._draw_cell(ax, 0, (n_rows - 1 - i) * sz, allele,
                            cfg.color_header, cfg.font_size_header)

        # 자손 유전자형
        for i, cells in enumerate(grid):
            for j, genotype in enumerate(cells):
                color = (cfg.color_dominant if gene.dominant_allele in genotype
                         else cfg.color_recessive)
                self._draw_cell(ax, (j + 1) * sz, (n_rows - 1 - i) * sz,
                                genotype, color, cfg.font_size_cell)

        ax.text(0.5 * sz, (n_rows + 0.5) * sz, f"{parent1_genotype} x {parent2_genotype}",
                ha='center', va='center', fontsize=cfg.font_size_header - 4)

        ax.set_xlim(0, (n_cols + 1) * sz)
        ax.set_ylim(0, (n_rows + 1) * sz)
        ax.set_aspect('equal')
        ax.axis('off')
        if title:
            ax.set_title(title)

        return self._render(fig, save_path)

    def draw_probability_chart(
        self,
        result: CrossResult,
        title: str = "",
        save_path: Optional[str] = None
    ) -> str:
        """유전자형/표현형 확률 막대그래프"""
        cfg = self.config
        fig, (ax_g, ax_p) = plt.subplots(1, 2, figsize=(cfg.fig_width * 2, cfg.fig_height))

        genotypes = [r.genotype for r in result.genotype_results]
        probabilities = np.array([r.probability for r in result.genotype_results])
        self._draw_bars(ax_g, genotypes, probabilities, "Genotype")

        phenotypes = [r.phenotype for r in result.phenotype_results]
        probabilities = np.array([r.probability for r in result.phenotype_results])
        self._draw_bars(ax_p, phenotypes, probabilities, "Phenotype")

        fig.suptitle(title or f"{result.gene.trait_name}: "
                              f"{result.parent1_genotype} x {result.parent2_genotype}")

        return self._render(fig, save_path)

    def _draw_cell(self, ax, x, y, text, color, font_size):
        cfg = self.config
        ax.add_patch(Rectangle((x, y), cfg.cell_size, cfg.cell_size,
                               facecolor=color, edgecolor=cfg.edge_color,
                               lw=cfg.line_width))
        ax.text(x + cfg.cell_size / 2, y + cfg.cell_size / 2, text,
                ha='center', va='center', fontsize=font_size)

    def _draw_bars(self, ax, labels, probabilities, xlabel):
        cfg = self.config
        positions = np.arange(len(labels))
        ax.bar(positions, probabilities, color=cfg.color_bar, edgecolor=cfg.edge_color)
        ax.set_xticks(positions)
        ax.set_xticklabels(labels)
        ax.set_ylim(0, 1.05)
        ax.set_yticks(np.linspace(0, 1, 5))
        ax.set_xlabel(xlabel)
        ax.set_ylabel("Probability")
        for x, p in zip(positions, probabilities):
            ax.text(x, p + 0.02, f"{p * 100:.0f}%", ha='center', va='bottom')

    def _render(self, fig, save_path: Optional[str] = None) -> str:
        cfg = self.config
        fig.tight_layout()

        # 파일 저장
        if save_path:
            fig.savefig(save_path, dpi=cfg.dpi, bbox_inches='tight', facecolor='white')

        # 이미지 반환
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=cfg.dpi, bbox_inches='tight', facecolor='white')
        buf.seek(0)
        img_base64 = base64.b64encode(buf.read()).decode('utf-8')
        plt.close(fig)
        return img_base64

    # --------------------------------------------------------
    # 유틸리티 메서드
    # --------------------------------------------------------
    def save_to_file(self, gene: Gene, parent1_genotype: str, parent2_genotype: str,
                     filepath: str, title: str = ""):
        """퍼넷 사각형 파일로 저장"""
        self.draw_punnett_square(gene, parent1_genotype, parent2_genotype,
                                 title=title, save_path=filepath)

"""
Chart rendering with Matplotlib and Seaborn.
Images are returned as base64 PNG strings ready for an <img> data URI.
Uses the Agg backend so it works on servers without a display.
"""
import io
import base64
import logging
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

from core.utils.helpers import DEFAULT_STATUS_COLOR

logger = logging.getLogger(__name__)


class ChartGenerator:
    """Static charts for the dashboard and outcome reports."""

    THEME = {
        'text': '#374151',
        'grid': '#9ca3af',
    }

    BASE_STYLE = {
        'font.family': 'sans-serif',
        'font.sans-serif': ['Inter', 'system-ui', 'Segoe UI', 'DejaVu Sans', 'sans-serif'],
        'font.size': 12,
        'axes.labelsize': 12,
        'axes.titlesize': 14,
        'xtick.labelsize': 11,
        'ytick.labelsize': 11,
        'axes.unicode_minus': False,
        'axes.linewidth': 0,
    }

    @classmethod
    def _apply_style(cls):
        theme = cls.THEME
        plt.style.use('default')
        plt.rcParams.update({
            **cls.BASE_STYLE,
            'text.color': theme['text'],
            'axes.labelcolor': theme['text'],
            'xtick.color': theme['text'],
            'ytick.color': theme['text'],
            'axes.facecolor': 'none',
            'figure.facecolor': 'none',
            'savefig.facecolor': 'none',
            'savefig.transparent': True,
            'grid.color': theme['grid'],
            'grid.linestyle': ':',
            'grid.alpha': 0.4,
        })
        sns.set_style("whitegrid", {
            "axes.facecolor": "none",
            "figure.facecolor": "none",
            "grid.color": theme['grid'],
        })
        return theme

    @classmethod
    def _setup_figure(cls, figsize=(8, 3.5)):
        theme = cls._apply_style()
        fig, ax = plt.subplots(figsize=figsize, facecolor='none')
        ax.set_facecolor('none')
        return fig, ax, theme

    @staticmethod
    def _fig_to_base64(fig, dpi=140):
        buf = io.BytesIO()
        try:
            fig.savefig(buf, format="png", dpi=dpi, bbox_inches='tight', pad_inches=0.1, transparent=True)
        finally:
            plt.close(fig)
        buf.seek(0)
        return base64.b64encode(buf.read()).decode("utf-8")

    @classmethod
    def generate_horizontal_bar_chart(cls, labels, counts, colors, title):
        """One bar per label, value printed at the end of each bar."""
        if not labels:
            return None

        fig, ax, theme = cls._setup_figure(figsize=(8, max(2.5, len(labels) * 0.9)))
        y_pos = range(len(labels))
        bars = ax.barh(y_pos, counts, color=colors, alpha=0.95, height=0.7, zorder=3)

        ax.set_yticks(y_pos)
        ax.set_yticklabels([str(label)[:40] for label in labels], weight='medium', color=theme['text'])
        ax.invert_yaxis()
        ax.set_title(title, fontsize=14, weight='bold', pad=14, color=theme['text'])

        for side in ('top', 'right', 'bottom', 'left'):
            ax.spines[side].set_visible(False)
        ax.tick_params(axis='x', bottom=False, labelbottom=False)
        ax.tick_params(axis='y', left=False)
        ax.bar_label(bars, fmt='%d', padding=8, weight='bold', color=theme['text'])

        # Keep room for labels when every value is zero
        if not any(counts):
            ax.set_xlim(0, 1)

        plt.tight_layout()
        return cls._fig_to_base64(fig)

    @classmethod
    def generate_outcome_chart(cls, distribution, title='Status Breakdown'):
        """Chart for ``DashboardStats.distribution()`` rows."""
        return cls.generate_horizontal_bar_chart(
            [row['label'] for row in distribution],
            [row['value'] for row in distribution],
            [row.get('color', DEFAULT_STATUS_COLOR) for row in distribution],
            title,
        )

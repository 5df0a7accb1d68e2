"""
services/chart_service.py
--------------------------
Generates chart images for the dashboard.
Uses matplotlib to create bar/pie charts and returns them as BytesIO buffers.
"""

import io

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for server use
import matplotlib.pyplot as plt

from services.dashboard_service import DashboardService
from utils.logger import get_logger
from utils.money import format_eur, money_sum

logger = get_logger(__name__)

plt.rcParams["font.family"] = "DejaVu Sans"
plt.rcParams["figure.facecolor"] = "#1a1a2e"
plt.rcParams["text.color"] = "#e0e0e0"
plt.rcParams["axes.facecolor"] = "#1a1a2e"

_COLORS = [
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4",
    "#FFEAA7", "#DDA0DD", "#98D8C8", "#F7DC6F",
    "#BB8FCE", "#85C1E9", "#F1948A", "#82E0AA",
]


class ChartService:
    """Renders dashboard views as PNG images."""

    def __init__(self, dashboard_service=None):
        self.dashboard = dashboard_service or DashboardService()

    def generate_series_bar(self, months: int = 6, today=None) -> io.BytesIO | None:
        """
        Grouped bars of income, expenses and taxes for the last ``months``
        months, with net income as a line.

        Returns:
            BytesIO buffer with PNG image, or None if every month is empty.
        """
        points = self.dashboard.get_income_expense_series(months, today)
        if not any(p.income or p.expenses for p in points):
            return None

        labels = [p.month for p in points]
        income = [float(p.income) for p in points]
        expenses = [float(p.expenses) for p in points]
        taxes = [float(p.tax) for p in points]
        net = [float(p.net) for p in points]

        positions = range(len(points))
        width = 0.27

        fig, ax = plt.subplots(figsize=(10, 5))
        ax.bar([x - width for x in positions], income, width=width,
               color="#4ECDC4", label="Entrate", zorder=3)
        ax.bar(list(positions), expenses, width=width,
               color="#FF6B6B", label="Spese", zorder=3)
        ax.bar([x + width for x in positions], taxes, width=width,
               color="#FFEAA7", label="Tasse e INPS", zorder=3)
        ax.plot(list(positions), net, color="#BB8FCE", marker="o",
                linewidth=2, label="Netto", zorder=4)

        ax.set_xticks(list(positions))
        ax.set_xticklabels(labels, fontsize=9, color="#e0e0e0")
        ax.set_ylabel("Importo (€)", fontsize=11, color="#e0e0e0")
        ax.set_title(
            f"Entrate e spese - ultimi {len(points)} mesi\n"
            f"Netto: {format_eur(money_sum(p.net for p in points))}",
            fontsize=13, fontweight="bold", pad=15,
        )
        ax.legend(frameon=False, fontsize=9, labelcolor="#e0e0e0")

        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)
        ax.spines["left"].set_color("#444")
        ax.spines["bottom"].set_color("#444")
        ax.tick_params(colors="#e0e0e0")
        ax.grid(axis="y", alpha=0.2, color="#888")
        ax.set_axisbelow(True)

        buf = _render(fig)
        logger.info(f"Generated income/expense chart for {len(points)} months")
        return buf

    def generate_category_pie(self) -> io.BytesIO | None:
        """
        Donut chart of expenses by category.

        Returns:
            BytesIO buffer with PNG image, or None if there are no expenses.
        """
        categories = self.dashboard.get_expense_by_category()
        if not categories:
            return None

        values = [float(c.total_amount) for c in categories]
        total = money_sum(c.total_amount for c in categories)

        fig, ax = plt.subplots(figsize=(8, 6))
        wedges, _, autotexts = ax.pie(
            values,
            labels=None,
            autopct=lambda pct: f"{pct:.1f}%",
            colors=[_COLORS[i % len(_COLORS)] for i in range(len(values))],
            startangle=90,
            pctdistance=0.82,
            wedgeprops=dict(width=0.5, edgecolor="#1a1a2e", linewidth=2),
        )

        for autotext in autotexts:
            autotext.set_color("white")
            autotext.set_fontsize(10)
            autotext.set_fontweight("bold")

        ax.legend(
            wedges,
            [f"{c.category_name}: {format_eur(c.total_amount)}" for c in categories],
            loc="center left",
            bbox_to_anchor=(1, 0, 0.5, 1),
            fontsize=10,
            frameon=False,
        )
        ax.set_title(
            f"Spese per categoria\nTotale: {format_eur(total)}",
            fontsize=14, fontweight="bold", pad=20,
        )

        buf = _render(fig)
        logger.info(f"Generated category chart with {len(categories)} categories")
        return buf


def _render(fig) -> io.BytesIO:
    plt.tight_layout()
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=150, bbox_inches="tight",
                facecolor=fig.get_facecolor())
    buf.seek(0)
    plt.close(fig)
    return buf

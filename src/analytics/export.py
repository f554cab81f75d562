"""CSV-экспорт отчёта аналитики за период."""

import csv
import io
from datetime import datetime
from decimal import Decimal
from typing import List

from src.analytics.aggregation import margin_percentage
from src.analytics.dashboard import DashboardStats
from src.analytics.formatting import share_percentages
from src.core.math.money import CENT, quantize

REPORT_TITLE = "Rapport Analytics - Stash."


def _money(value: Decimal) -> str:
    return str(quantize(value, CENT))


def _pct(value: Decimal) -> str:
    return str(quantize(value, Decimal("0.1")))


def report_filename(stats: DashboardStats, generated_at: datetime) -> str:
    """'analytics-stash-30d-2025-09-09.csv'"""
    return f"analytics-stash-{stats.period.value}-{generated_at.date().isoformat()}.csv"


def export_report_csv(stats: DashboardStats, generated_at: datetime) -> str:
    """CSV отчёта: заголовок, KPI, топ категорий, топ брендов, динамика выручки.

    Доли категорий и брендов считаются от выручки всего текущего окна.

    Args:
        stats: статистика дашборда
        generated_at: момент генерации (инжектируется)

    Returns:
        CSV как строка
    """
    metrics = stats.current.metrics
    rows: List[List[str]] = [
        [REPORT_TITLE, ""],
        ["Période", stats.period.value],
        ["Généré le", generated_at.strftime("%d/%m/%Y")],
        ["", ""],
        ["INDICATEURS CLÉS", ""],
        ["Revenus totaux", f"{_money(metrics.revenue)} €"],
        ["Bénéfices totaux", f"{_money(metrics.profit)} €"],
        ["Ventes réalisées", str(metrics.count)],
        ["Marge moyenne", f"{_pct(margin_percentage(metrics))} %"],
        ["", ""],
        ["TOP CATÉGORIES", "", "", ""],
        ["Catégorie", "Produits vendus", "Revenus (€)", "Part (%)"],
    ]
    for group, share in share_percentages(stats.top_categories, total=metrics.revenue):
        rows.append([group.key, str(group.count), _money(group.revenue), _pct(share)])

    rows += [
        ["", "", "", ""],
        ["TOP MARQUES", "", "", ""],
        ["Marque", "Produits vendus", "Revenus (€)", "Part (%)"],
    ]
    for group, share in share_percentages(stats.top_brands, total=metrics.revenue):
        rows.append([group.key, str(group.count), _money(group.revenue), _pct(share)])

    rows += [
        ["", "", "", ""],
        ["ÉVOLUTION DES REVENUS", "", "", ""],
        ["Période", "Revenus (€)", "Bénéfices (€)", ""],
    ]
    for bucket in stats.period_revenue:
        rows.append([bucket.label, _money(bucket.revenue), _money(bucket.profit), ""])

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()

"""
Scoreboard table for the Streamlit view.

Builds the string table shown on the scoreboard page plus a boolean mask
of round-winner cells, and turns both into a pandas Styler. Kept free of
Streamlit so the layout can be tested on its own.

The Total row (rounds layout) or column (players layout) is always the
last one and is located by position, so a player may be called "Total".
"""

import numpy as np
import pandas as pd

from src.config import EXPORT_ROUND_LABEL, EXPORT_TOTAL_LABEL
from src.scoring.engine import total_scores
from src.scoring.formulas import value_factor
from src.utils import format_score


def format_cell(score, value, point, show_details):
    if not show_details:
        return format_score(score)
    return f"V: {format_score(value_factor(value))} · P: {point} · S: {format_score(score)}"


def build_display_table(session, show_details=False, players_as_rows=False):
    """
    Display-ready scoreboard (strings) plus the winner mask used for styling.

    Rows are rounds labelled "<n> (<TVF>)" followed by the Total row;
    transposed when players_as_rows is set, with columns "Round <n>" and
    Total last.
    """
    players = session.players
    totals = total_scores(session.rounds, session.num_players)

    rows, labels, winners = [], [], []
    for i, rnd in enumerate(session.rounds):
        labels.append(f"{i + 1} ({format_score(rnd.total_value_factor)})")
        rows.append([
            format_cell(rnd.scores[p], rnd.values[p], rnd.points[p], show_details)
            for p in range(len(players))
        ])
        winners.append([p == rnd.winner for p in range(len(players))])

    labels.append(EXPORT_TOTAL_LABEL)
    rows.append([format_score(t) for t in totals])
    winners.append([False] * len(players))

    df = pd.DataFrame(rows, index=labels, columns=players)
    mask = pd.DataFrame(winners, index=labels, columns=players)
    df.index.name = "Round (TVF)"

    if players_as_rows:
        df, mask = df.T, mask.T
        df.columns = [f"{EXPORT_ROUND_LABEL} {i + 1}" for i in range(session.num_rounds)] + [EXPORT_TOTAL_LABEL]
        mask.columns = df.columns
        df.index.name = "Players"
    return df, mask


def table_styles(mask, players_as_rows=False, winner_color="green", total_bg="yellow"):
    """
    CSS per cell: winner cells bold and coloured, the last row (or column
    when players_as_rows) shaded as the Total.
    """
    winner_css = f"font-weight: 700; color: {winner_color};"
    total_css = f"font-weight: 600; background-color: {total_bg};"

    styles = pd.DataFrame(
        np.where(mask.to_numpy(dtype=bool), winner_css, ""),
        index=mask.index,
        columns=mask.columns,
    )
    if players_as_rows:
        styles.iloc[:, -1] = total_css
    else:
        styles.iloc[-1, :] = total_css
    return styles


def style_table(df, mask, players_as_rows=False, winner_color="green", total_bg="yellow"):
    styles = table_styles(mask, players_as_rows, winner_color, total_bg)
    return df.style.apply(lambda _: styles, axis=None)

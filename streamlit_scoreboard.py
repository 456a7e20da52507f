import pandas as pd
import plotly.express as px
import streamlit as st

from src.config import (
    APP_TITLE,
    DEFAULT_PLAYERS,
    EXPORT_FILENAME,
    MAX_POINT,
    MAX_PLAYERS,
    MIN_PLAYERS,
    MIN_POINT,
    MIN_VALUE,
)
from src.display import build_display_table, style_table
from src.export import export_scoreboard_csv
from src.scoring.engine import (
    cumulative_totals,
    find_game_winner,
    is_game_over,
    total_scores,
)
from src.session.errors import RoundLimitError, SessionStoreError, ValidationError
from src.session.game import (
    RoundDraft,
    reset_rounds,
    reset_session,
    start_new_game,
)
from src.session.players import clamp_player_count, find_duplicate_indices
from src.session.store import JsonFileSessionStore
from src.utils import format_score, get_initials, setup_logging

# --- Page Configuration ---
st.set_page_config(
    page_title=f"{APP_TITLE} Scoreboard",
    page_icon="🃏",
    layout="wide",
    initial_sidebar_state="collapsed"
)

logger = setup_logging("streamlit_scoreboard")

# --- Design System ---
ACCENT_COLORS = {
    "winner": "#16A34A",        # Green - round winner cells
    "total_bg": "rgba(250, 204, 21, 0.25)",  # Yellow - Total row/column
    "chart_palette": [
        "#FF6B6B", "#3B82F6", "#10B981", "#F59E0B", "#8B5CF6",
        "#EC4899", "#06B6D4", "#84CC16", "#F97316", "#6366F1"
    ],
}

VIEW_SETUP = "setup"
VIEW_SCOREBOARD = "scoreboard"

ORIENTATION_OPTIONS = ["Rounds ↓", "Players ↓"]


@st.cache_resource
def get_store():
    """One JSON-backed store per server process."""
    return JsonFileSessionStore()


# --- Session State Helpers ---
def load_session():
    """Read the persisted session once per browser session."""
    if "session" not in st.session_state:
        st.session_state.session = get_store().load()
    return st.session_state.session


def set_session(session):
    st.session_state.session = session
    st.session_state.pop("draft", None)
    clear_round_inputs()


def get_draft(session):
    draft = st.session_state.get("draft")
    if draft is None or draft.num_players != session.num_players:
        draft = RoundDraft(session.num_players)
        st.session_state.draft = draft
    return draft


def clear_round_inputs():
    """Drop round-form widget values so the next entry starts at zero."""
    for key in list(st.session_state.keys()):
        if key.startswith(("round_value_", "round_point_")) or key == "round_winner":
            del st.session_state[key]


def go_to(view):
    st.query_params["view"] = view
    st.rerun()


# --- Confirmation Dialogs ---
@st.dialog("Reset game")
def confirm_reset_game():
    st.write("Are you sure you want to reset the current game?")
    col_yes, col_no = st.columns(2)
    if col_yes.button("Reset", type="primary", use_container_width=True):
        set_session(reset_rounds(get_store(), st.session_state.session))
        st.session_state.show_form = False
        st.rerun()
    if col_no.button("Cancel", use_container_width=True):
        st.rerun()


@st.dialog("Start new game")
def confirm_new_game():
    st.write("Are you sure you want to start a new game?")
    col_yes, col_no = st.columns(2)
    if col_yes.button("Start over", type="primary", use_container_width=True):
        set_session(reset_session(get_store()))
        st.session_state.show_form = False
        go_to(VIEW_SETUP)
    if col_no.button("Cancel", use_container_width=True):
        st.rerun()


# --- Charts ---
def create_totals_chart(session):
    """Line chart of every player's running total after each round."""
    df = cumulative_totals(session.rounds, session.players)
    fig = px.line(
        df,
        markers=True,
        color_discrete_sequence=ACCENT_COLORS["chart_palette"],
        labels={"value": "Running total", "variable": "Player"},
    )
    fig.update_layout(
        height=320,
        margin=dict(l=10, r=10, t=30, b=10),
        xaxis=dict(dtick=1),
        legend_title_text="",
    )
    return fig


# --- Views ---
def render_setup():
    st.header("Start New Game")

    requested = st.number_input(
        f"Number of Players ({MIN_PLAYERS}-{MAX_PLAYERS}):",
        value=DEFAULT_PLAYERS,
        step=1,
        key="num_players_input",
    )
    num_players, count_message = clamp_player_count(int(requested))
    if count_message:
        st.error(count_message)

    names = []
    for idx in range(num_players):
        names.append(st.text_input(
            f"Player {idx + 1} Name:",
            placeholder=f"Player {idx + 1}",
            key=f"player_name_{idx}",
        ))

    duplicates = find_duplicate_indices(names)
    if duplicates:
        marked = ", ".join(f"Player {i + 1}" for i in duplicates)
        st.warning(f"Duplicate names: {marked}")

    if st.button("Start Game", type="primary"):
        try:
            session = start_new_game(get_store(), names, num_players)
        except ValidationError as e:
            logger.warning(f"Setup rejected: {e}")
            st.error(str(e))
            return
        set_session(session)
        st.session_state.show_form = False
        go_to(VIEW_SCOREBOARD)


def render_round_form(session):
    draft = get_draft(session)
    players = session.players

    with st.container(border=True):
        winner = st.selectbox(
            "Select Winner:",
            options=list(range(len(players))),
            format_func=lambda i: get_initials(players[i]),
            key="round_winner",
        )
        draft.set_winner(winner)

        for idx, player in enumerate(players):
            col_name, col_value, col_point, col_detail = st.columns([2, 2, 2, 2])
            label = f"{player} (Winner)" if idx == draft.winner else player
            col_name.markdown(f"**{label}**")
            value = col_value.number_input(
                "Value", min_value=MIN_VALUE, value=draft.values[idx], step=1,
                key=f"round_value_{idx}", label_visibility="visible" if idx == 0 else "collapsed",
            )
            draft.set_value(idx, int(value))
            point = col_point.number_input(
                "Point", min_value=MIN_POINT, max_value=MAX_POINT,
                value=0 if idx == draft.winner else draft.points[idx], step=1,
                key=f"round_point_{idx}", disabled=idx == draft.winner,
                label_visibility="visible" if idx == 0 else "collapsed",
            )
            draft.set_point(idx, int(point))

        if st.session_state.get("show_details"):
            for idx, row in enumerate(draft.preview()):
                st.caption(
                    f"{get_initials(players[idx])}: VF {format_score(row['value_factor'])}, "
                    f"Score {format_score(row['score'])}"
                )

        col_submit, col_cancel = st.columns(2)
        if col_submit.button("Submit Round", type="primary", use_container_width=True):
            try:
                updated = draft.submit(get_store(), session)
            except (RoundLimitError, ValidationError) as e:
                logger.warning(f"Round rejected: {e}")
                st.error(str(e))
                return
            set_session(updated)
            st.session_state.show_form = False
            st.rerun()
        if col_cancel.button("Cancel", use_container_width=True):
            st.session_state.show_form = False
            st.rerun()


def render_scoreboard(session):
    game_over = is_game_over(session.num_players, session.num_rounds)
    limit_reached = session.num_rounds >= session.num_players

    col_title, col_round, col_details, col_export = st.columns([4, 1, 1, 1])
    col_title.header("Scoreboard")
    if col_round.button("➕ Round", disabled=limit_reached, use_container_width=True):
        st.session_state.show_form = not st.session_state.get("show_form", False)
    show_details = col_details.toggle(
        "Show Hands", key="show_details", disabled=session.num_rounds == 0,
    )
    if game_over:
        col_export.download_button(
            "⬇️ CSV",
            data=export_scoreboard_csv(session.players, session.rounds),
            file_name=EXPORT_FILENAME,
            mime="text/csv",
            use_container_width=True,
        )

    orientation = st.radio(
        "Layout",
        ORIENTATION_OPTIONS,
        horizontal=True,
        label_visibility="collapsed",
        key="orientation",
    )

    if st.session_state.get("show_form") and not limit_reached:
        render_round_form(session)

    if game_over:
        totals = total_scores(session.rounds, session.num_players)
        winner = find_game_winner(totals)
        st.success(f"🎉 Congratulations {session.players[winner]}! 🎉")

    players_as_rows = orientation == ORIENTATION_OPTIONS[1]
    df, mask = build_display_table(session, show_details=show_details, players_as_rows=players_as_rows)
    styled = style_table(
        df, mask, players_as_rows,
        winner_color=ACCENT_COLORS["winner"],
        total_bg=ACCENT_COLORS["total_bg"],
    )
    st.dataframe(styled, use_container_width=True)

    if session.num_rounds > 0:
        st.plotly_chart(create_totals_chart(session), use_container_width=True, config={'displayModeBar': False})

    col_reset, col_new = st.columns(2)
    if col_reset.button("Reset Game", use_container_width=True):
        confirm_reset_game()
    if col_new.button("Start New Game", use_container_width=True):
        confirm_new_game()


# --- Main App ---
def main():
    st.title(APP_TITLE)

    try:
        session = load_session()
    except SessionStoreError as e:
        logger.error(f"Could not load saved session: {e}")
        st.error(f"Could not load the saved game: {e}")
        if st.button("Start New Game"):
            set_session(reset_session(get_store()))
            go_to(VIEW_SETUP)
        return

    default_view = VIEW_SCOREBOARD if session.has_players else VIEW_SETUP
    view = st.query_params.get("view", default_view)
    if view == VIEW_SCOREBOARD and not session.has_players:
        view = VIEW_SETUP

    if view == VIEW_SETUP:
        render_setup()
    else:
        render_scoreboard(session)

    st.caption(f"© {pd.Timestamp.now().year} Scoreboard App")


if __name__ == "__main__":
    main()

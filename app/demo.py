"""
Minesweeper Auto-Solver - Interactive Demo

Run with: streamlit run app/demo.py
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import random
import streamlit as st
from typing import Optional, Tuple

from autosweeper import Board, LocalTransport, SolverSession
from autosweeper.config import DIFFICULTY_CONFIG

HINT_COLORS = {
    1: "#1f4fd8",
    2: "#2e7d32",
    3: "#c62828",
    4: "#283593",
    5: "#6d1b1b",
    6: "#00796b",
    7: "#212121",
    8: "#757575",
}

# (minimum board width, cell px, font px), widest first
CELL_SIZES = ((30, 14, 10), (16, 20, 13), (0, 26, 15))


def cell_style(board: Board, x: int, y: int) -> Tuple[str, str, str]:
    """Return (text, background, text color) for one cell."""
    if (x, y) in board.flags:
        return "F", "#ef6c00", "#ffffff"
    hint = board.grid[y][x]
    if hint is None:
        return "", "#b0bec5", "#000000"
    if hint == 0:
        return "", "#eceff1", "#000000"
    return str(hint), "#ffffff", HINT_COLORS.get(hint, "#000000")


def render_board_html(
    board: Board,
    highlight_cell: Optional[Tuple[int, int]] = None,
) -> str:
    """Render the solver's view of the board as an HTML table."""
    cell_px, font_px = next(
        (cell, font) for min_width, cell, font in CELL_SIZES if board.width >= min_width
    )

    rows = []
    for y in range(board.height):
        cells = []
        for x in range(board.width):
            text, bg, color = cell_style(board, x, y)
            outline = "2px solid #d50000" if (x, y) == highlight_cell else "1px solid #90a4ae"
            cells.append(
                f'<td title="({x}, {y})" style="width:{cell_px}px;height:{cell_px}px;'
                f"background:{bg};color:{color};border:{outline};"
                f'font-size:{font_px}px;font-weight:bold;text-align:center;">{text}</td>'
            )
        rows.append("<tr>" + "".join(cells) + "</tr>")

    return (
        '<div style="font-family:monospace;">'
        '<table style="border-collapse:collapse;margin:auto;">'
        + "".join(rows)
        + "</table></div>"
    )


def new_session(seed: Optional[int]) -> None:
    """Create a transport/session pair and wire its callbacks into session_state."""
    transport = LocalTransport(rng=random.Random(seed))
    session = SolverSession(transport)

    def map_updated(raw_map: str) -> None:
        st.session_state.raw_map = raw_map

    def lost() -> None:
        st.session_state.outcome = "lost"

    def won(message: str) -> None:
        st.session_state.outcome = message

    session.on_map_updated = map_updated
    session.on_game_lost = lost
    session.on_game_win = won

    st.session_state.transport = transport
    st.session_state.session = session
    st.session_state.raw_map = ""
    st.session_state.outcome = None
    st.session_state.last_step = None


def main():
    st.set_page_config(
        page_title="Minesweeper Auto-Solver",
        page_icon="💣",
        layout="wide",
    )

    st.title("Minesweeper Auto-Solver")
    st.markdown("""
    Deduction over a circular worklist, then exact group probabilities when deduction stalls.
    """)

    # Sidebar configuration
    st.sidebar.header("Game Configuration")

    level = st.sidebar.selectbox(
        "Difficulty",
        sorted(DIFFICULTY_CONFIG),
        format_func=lambda lv: "{name} ({width}x{height}, {mines})".format(**DIFFICULTY_CONFIG[lv]),
    )
    seed_text = st.sidebar.text_input("Seed (optional)", "")
    seed = int(seed_text) if seed_text.strip().isdigit() else None

    if "session" not in st.session_state:
        new_session(seed)

    session: SolverSession = st.session_state.session
    transport: LocalTransport = st.session_state.transport

    btn_col1, btn_col2, btn_col3 = st.columns(3)
    with btn_col1:
        if st.button("New game", type="primary"):
            new_session(seed)
            st.session_state.session.start_game(level)
            st.session_state.transport.deliver_pending()
            st.rerun()
    with btn_col2:
        if st.button("Make step"):
            step = session.make_step()
            transport.deliver_pending()
            st.session_state.last_step = step
            st.rerun()
    with btn_col3:
        if st.button("Auto solve"):
            if session.set_autosolve():
                transport.deliver_pending()
            st.rerun()

    with st.form("open_coords"):
        x_col, y_col, go_col = st.columns([1, 1, 1])
        x = x_col.number_input("x", min_value=0, value=0, step=1)
        y = y_col.number_input("y", min_value=0, value=0, step=1)
        if go_col.form_submit_button("Open"):
            session.open_coords(int(x), int(y))
            transport.deliver_pending()
            st.rerun()

    outcome = st.session_state.outcome
    if outcome == "lost":
        st.error("Game lost :(")
    elif outcome:
        st.success(outcome)

    last_step = st.session_state.get("last_step")
    highlight = None
    if last_step is not None and last_step.guess is not None:
        highlight = last_step.guess.cell.coords
        st.info(
            f"Guessed ({highlight[0]}, {highlight[1]}) "
            f"with mine probability {last_step.guess.probability:.2f}"
        )

    if session.board is not None:
        st.markdown(render_board_html(session.board, highlight), unsafe_allow_html=True)
        if st.session_state.raw_map:
            with st.expander("Last map from the server"):
                st.code(st.session_state.raw_map)
        st.subheader("Solver Statistics")
        for label, value in session.metrics().items():
            st.text(f"{label}: {value}")
    else:
        st.info("Click 'New game' to start.")


if __name__ == "__main__":
    main()

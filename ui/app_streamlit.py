"""Streamlit UI for Mines."""

from __future__ import annotations

import streamlit as st

from mines.rules_schema import RuleSet
from mines.service import GameView, MinesService


def get_service() -> MinesService:
    if "mines_service" not in st.session_state:
        st.session_state["mines_service"] = MinesService(RuleSet())
    return st.session_state["mines_service"]


def rerun() -> None:
    st.rerun()


def cell_label(cell) -> str:
    if not cell.revealed and cell.has_mine is None:
        return "?"
    if cell.has_mine:
        return "💣" if cell.revealed else "·💣"
    return "💎" if cell.revealed else "·"


def render_betting_controls(service: MinesService) -> None:
    rules = service.rules
    st.sidebar.subheader("Place a bet")
    bet = st.sidebar.number_input("Bet amount", min_value=float(rules.min_bet), value=10.0, step=1.0)
    mines = st.sidebar.slider("Mines", min_value=1, max_value=rules.max_mine_count, value=rules.default_mine_count)
    if st.sidebar.button("Start game"):
        try:
            service.start_game(float(bet), int(mines))
            rerun()
        except Exception as exc:
            st.sidebar.error(f"Cannot start: {exc}")


def render_deposit_controls(service: MinesService) -> None:
    st.sidebar.subheader("Funds")
    amount = st.sidebar.number_input("Deposit", min_value=1.0, value=100.0, step=10.0)
    if st.sidebar.button("Deposit"):
        try:
            service.deposit(float(amount))
            rerun()
        except Exception as exc:
            st.sidebar.error(str(exc))
    if st.sidebar.button("Reset balance"):
        service.reset_balance()
        rerun()


def render_board(service: MinesService, view: GameView) -> None:
    active = view.status == "active"
    for row in view.board:
        cols = st.columns(view.grid_size)
        for col, cell in zip(cols, row):
            disabled = not active or cell.revealed
            if col.button(cell_label(cell), key=f"cell-{view.id}-{cell.row}-{cell.col}", disabled=disabled):
                try:
                    service.reveal_cell(cell.row, cell.col)
                    rerun()
                except Exception as exc:
                    st.error(str(exc))


def render_stats(service: MinesService, view: GameView) -> None:
    stats = view.stats
    st.metric("Multiplier", f"{stats.multiplier:.2f}x")
    st.metric("Potential payout", f"${stats.potential_payout:.2f}")
    st.write(f"Bet: ${view.bet:.2f} · Mines: {view.mine_count}")
    st.write(f"Revealed: {stats.revealed_safe} / {stats.safe_cells} · Remaining gems: {stats.remaining_safe}")
    st.progress(stats.progress_percent / 100)
    if view.next_multipliers:
        st.caption(f"Next reveal pays {view.next_multipliers[0]:.2f}x (max {stats.max_multiplier:.2f}x)")

    if view.status == "active":
        if st.button("Cash out"):
            try:
                service.cash_out()
                rerun()
            except Exception as exc:
                st.error(str(exc))
    elif view.status == "lost":
        st.error("Boom! You hit a mine.")
    elif view.status == "won":
        st.success(f"Board cleared! You won ${view.payout:.2f}.")
    else:
        st.success(f"Cashed out ${view.payout:.2f}.")


def render_history(service: MinesService) -> None:
    with st.expander("Game history"):
        history = service.get_history()
        if not history:
            st.write("No games played yet.")
        for entry in history:
            st.write(
                f"{entry.timestamp[:19]} · {entry.result} · bet ${entry.bet:.2f} · "
                f"{entry.mine_count} mines · {entry.multiplier:.2f}x · payout ${entry.payout:.2f}"
            )


def main() -> None:
    st.set_page_config(page_title="Mines", layout="wide")
    st.title("Mines")

    service = get_service()
    player = service.get_player_view()

    st.sidebar.header(f"Balance: ${player.balance:.2f}")
    if not service.has_active_game():
        render_betting_controls(service)
    render_deposit_controls(service)

    if player.game is None:
        st.info("Place a bet to begin.")
    else:
        cols = st.columns([3, 2])
        with cols[0]:
            render_board(service, player.game)
        with cols[1]:
            render_stats(service, player.game)

    render_history(service)


if __name__ == "__main__":
    main()

import streamlit as st
import sys
import time
from pathlib import Path
from typing import Optional

# --- BOOTSTRAP ---
project_root = Path(__file__).resolve().parents[3]
src_path = project_root / "src"
if str(src_path) not in sys.path:
    sys.path.append(str(src_path))

from payout_monitor.core import config as app_config
from payout_monitor.core.logging_utils import get_logger
from payout_monitor.core.models import Account, GlobalConfig
from payout_monitor.core.state_store import StateStore
from payout_monitor.ledger import account_ops
from payout_monitor.ledger.blown_sweeper import BlownAccountSweeper
from payout_monitor.ledger.portfolio_summary import portfolio_totals
from payout_monitor.ui.account_card import render_account_card

logger = get_logger(__name__)

RESET_CONFIRM_WINDOW_SEC = 3.0

# --- SESSION STATE ---

def init_session_state() -> None:
    if 'store' not in st.session_state:
        st.session_state.store = StateStore()
    if 'accounts' not in st.session_state:
        st.session_state.accounts = st.session_state.store.load_accounts()
    if 'global_config' not in st.session_state:
        st.session_state.global_config = st.session_state.store.load_config()
    if 'sweeper' not in st.session_state:
        st.session_state.sweeper = BlownAccountSweeper()
    if 'reset_armed_at' not in st.session_state:
        st.session_state.reset_armed_at = None
    if 'notification' not in st.session_state:
        st.session_state.notification = None


def commit_accounts(accounts: list[Account]) -> None:
    """Replace the whole collection and persist it."""
    st.session_state.accounts = accounts
    st.session_state.store.save_accounts(accounts)


def commit_config(cfg: GlobalConfig) -> None:
    st.session_state.global_config = cfg
    st.session_state.store.save_config(cfg)


def update_account(updated: Account) -> None:
    commit_accounts(account_ops.replace_account(st.session_state.accounts, updated))
    st.rerun()


def delete_account(account_id: str) -> None:
    commit_accounts(account_ops.delete_account(st.session_state.accounts, account_id))
    st.rerun()

# --- SIDEBAR SECTIONS ---

def render_config_sidebar() -> None:
    """Renders the global rule thresholds in the Sidebar."""
    cfg: GlobalConfig = st.session_state.global_config

    st.sidebar.markdown("### ⚙️ Rules")
    target = st.sidebar.number_input("Daily Profit Target ($)", value=float(cfg.target_profit_threshold), step=10.0)
    days = st.sidebar.number_input("Required Qualified Days", min_value=0, value=int(cfg.required_days), step=1)
    max_dd = st.sidebar.number_input("Max Drawdown ($)", min_value=0.0, value=float(cfg.max_drawdown), step=100.0)
    liq = st.sidebar.number_input("Post-Payout Liq. Level ($)", value=float(cfg.post_payout_liquidation_level), step=100.0)
    ratio = st.sidebar.number_input(
        "Subsequent Payout %", min_value=0, max_value=100, value=int(cfg.subsequent_payout_ratio), step=5
    )

    updated = GlobalConfig(
        target_profit_threshold=float(target),
        required_days=int(days),
        max_drawdown=float(max_dd),
        post_payout_liquidation_level=float(liq),
        subsequent_payout_ratio=min(100, max(0, int(ratio))),
    )
    if updated != cfg:
        commit_config(updated)

    st.sidebar.markdown("---")
    render_reset_section()


def reset_confirm_remaining(armed_at: Optional[float], now: float) -> float:
    """Seconds left to confirm a reset; 0 when not armed or the window has closed."""
    if armed_at is None:
        return 0.0
    return max(0.0, RESET_CONFIRM_WINDOW_SEC - (now - armed_at))


def render_reset_section() -> None:
    """Two-click reset: first click arms, second click within the window clears everything."""
    armed = reset_confirm_remaining(st.session_state.reset_armed_at, time.monotonic()) > 0
    if not armed:
        st.session_state.reset_armed_at = None

    label = "⚠️ Click again to confirm" if armed else "🧹 Reset All Data"
    if st.sidebar.button(label, use_container_width=True):
        if not armed:
            st.session_state.reset_armed_at = time.monotonic()
            st.rerun()
        accounts, cfg = st.session_state.store.reset()
        st.session_state.accounts = accounts
        st.session_state.global_config = cfg
        st.session_state.sweeper = BlownAccountSweeper()
        st.session_state.reset_armed_at = None
        st.rerun()

# --- MAIN SECTIONS ---

def render_header() -> None:
    totals = portfolio_totals(st.session_state.accounts)
    c_title, c_bal, c_pay = st.columns([3, 1, 1])
    with c_title:
        st.title("📈 Payout Monitor")
        st.caption("Evaluation accounts, qualified days and payout eligibility.")
    c_bal.metric("Total Balance", f"${totals['total_balance']:,.2f}")
    c_pay.metric("Total Payouts", f"${totals['total_payouts']:,.2f}")


def sweep_blown_accounts() -> None:
    """Removes accounts that stayed blown past the grace delay."""
    if not app_config.AUTO_REMOVE_BLOWN:
        return

    sweeper: BlownAccountSweeper = st.session_state.sweeper
    cfg = st.session_state.global_config
    remaining, removed = sweeper.sweep(st.session_state.accounts, cfg)
    if removed:
        commit_accounts(remaining)
        names = ", ".join(f'"{a.name}"' for a in removed)
        st.session_state.notification = f"Account {names} was liquidated and removed."


def schedule_rerun() -> None:
    """
    Sleeps until the next timed change (blown account grace delay or reset
    confirm window) and reruns so the page reflects it. A user interaction
    interrupts the sleep.
    """
    waits = []
    if app_config.AUTO_REMOVE_BLOWN:
        pending = st.session_state.sweeper.pending(st.session_state.accounts, st.session_state.global_config)
        waits.extend(remaining for _, remaining in pending)

    reset_left = reset_confirm_remaining(st.session_state.reset_armed_at, time.monotonic())
    if reset_left > 0:
        waits.append(reset_left)

    if waits:
        time.sleep(min(waits))
        st.rerun()


def main() -> None:
    st.set_page_config(page_title="Payout Monitor", page_icon="📈", layout="wide")
    init_session_state()

    sweep_blown_accounts()
    render_config_sidebar()
    render_header()

    if st.session_state.notification:
        st.toast(st.session_state.notification, icon="💥")
        st.session_state.notification = None

    if st.button("➕ Add Account", type="primary"):
        accounts = st.session_state.accounts
        commit_accounts([*accounts, account_ops.create_account(accounts)])
        st.rerun()

    accounts = st.session_state.accounts
    if not accounts:
        st.info("No accounts yet. Initialize a new account to start tracking payouts.")
    else:
        cfg = st.session_state.global_config
        cols = st.columns(2)
        for i, account in enumerate(accounts):
            with cols[i % 2]:
                render_account_card(account, cfg, on_update=update_account, on_delete=delete_account)

    schedule_rerun()


if __name__ == "__main__":
    main()

"""
Payout Monitor - Account Card
=============================

Renders a single account: header (name, type, delete), status badge,
balance metrics, profit chart and entries, payout form and payout history.

Every change goes through on_update / on_delete with a new Account value.
"""

from typing import Callable

import streamlit as st

from payout_monitor.core.models import Account, AccountType, GlobalConfig
from payout_monitor.ledger import account_ops
from payout_monitor.ledger.portfolio_summary import payout_history_frame, total_paid
from payout_monitor.rules.payout_policy import PayoutRejectedError, execute_payout, max_allowed_payout
from payout_monitor.rules.status_evaluator import evaluate
from payout_monitor.ui.charts import build_profit_chart_figure

TYPE_OPTIONS = [t.value for t in AccountType]


def _status_badge(is_blown: bool, can_payout: bool) -> str:
    if is_blown:
        return "🔴 **ACCOUNT BLOWN**"
    if can_payout:
        return "🟢 **PAYOUT READY**"
    return "🟡 **IN PROGRESS**"


def render_account_card(
    account: Account,
    config: GlobalConfig,
    on_update: Callable[[Account], None],
    on_delete: Callable[[str], None],
) -> None:
    status = evaluate(account, config)
    key = account.id

    with st.container(border=True):
        # --- HEADER ---
        c_name, c_type, c_del = st.columns([3, 2, 1])
        with c_name:
            new_name = st.text_input("Name", value=account.name, key=f"name_{key}", label_visibility="collapsed")
            if new_name != account.name:
                updated = account_ops.rename_account(account, new_name)
                if updated is not account:
                    on_update(updated)
            st.caption(f"`{account.id}`")
        with c_type:
            new_type = st.selectbox(
                "Type",
                options=TYPE_OPTIONS,
                index=TYPE_OPTIONS.index(account.type.value),
                key=f"type_{key}",
                label_visibility="collapsed",
            )
            if new_type != account.type.value:
                on_update(account_ops.set_account_type(account, AccountType(new_type)))
        with c_del:
            if st.button("🗑️", key=f"delete_{key}", help="Delete Account"):
                on_delete(account.id)
                return

        # --- STATUS ---
        st.markdown(f"{_status_badge(status.is_blown, status.can_payout)} · {status.reason}")

        m1, m2, m3 = st.columns(3)
        m1.metric("Balance", f"${account.balance:,.2f}")
        m2.metric("Qualified Days", f"{status.qualified_days}/{config.required_days}")
        m3.metric("Total Paid", f"${total_paid(account):,.2f}")

        # --- PROFIT HISTORY ---
        if account.daily_profits:
            st.plotly_chart(
                build_profit_chart_figure(account, config),
                use_container_width=True,
                key=f"chart_{key}",
            )
            with st.expander(f"📅 Daily Entries ({len(account.daily_profits)})", expanded=False):
                _render_profit_entries(account, on_update)
        else:
            st.caption("No trading days recorded yet.")

        # --- ADD PROFIT ---
        if status.is_blown:
            st.caption("Blown accounts take no further entries.")
        else:
            _render_profit_form(account, config, on_update)

        # --- PAYOUT ---
        if not status.is_blown:
            _render_payout_form(account, config, status.can_payout, on_update)

        # --- PAYOUT HISTORY ---
        with st.expander(f"💸 Payout History ({len(account.history_payouts)})", expanded=False):
            _render_payout_history(account, on_update)


def _render_profit_form(account: Account, config: GlobalConfig, on_update: Callable[[Account], None]) -> None:
    key = account.id
    with st.form(key=f"profit_form_{key}", clear_on_submit=True):
        c_in, c_btn = st.columns([3, 1])
        with c_in:
            raw_profit = st.text_input("Daily P/L", placeholder="e.g. 200 or -150", key=f"profit_in_{key}")
        with c_btn:
            submitted = st.form_submit_button("➕ Add Day", use_container_width=True)
        if submitted:
            updated = account_ops.add_profit_entry(account, raw_profit, config)
            if updated is account:
                st.warning("Enter a numeric profit/loss value.")
            else:
                on_update(updated)


def _render_profit_entries(account: Account, on_update: Callable[[Account], None]) -> None:
    for idx, profit in enumerate(account.daily_profits):
        c_day, c_val, c_save, c_del = st.columns([1, 3, 1, 1])
        c_day.markdown(f"**Day {idx + 1}**")
        raw = c_val.text_input(
            f"Day {idx + 1}",
            value=f"{profit:g}",
            key=f"entry_{account.id}_{idx}",
            label_visibility="collapsed",
        )
        if c_save.button("💾", key=f"entry_save_{account.id}_{idx}", help="Save entry"):
            on_update(account_ops.edit_profit_entry(account, idx, raw))
        if c_del.button("✖", key=f"entry_del_{account.id}_{idx}", help="Delete entry"):
            on_update(account_ops.delete_profit_entry(account, idx))


def _render_payout_form(
    account: Account,
    config: GlobalConfig,
    can_payout: bool,
    on_update: Callable[[Account], None],
) -> None:
    cap = max_allowed_payout(account.balance, config)
    c_amt, c_btn = st.columns([3, 1])
    with c_amt:
        amount = st.number_input(
            f"Payout amount (max ${cap:,.2f})",
            min_value=0.0,
            value=float(cap),
            step=50.0,
            key=f"payout_amt_{account.id}",
            disabled=not can_payout,
        )
    with c_btn:
        st.write("")
        clicked = st.button(
            "💰 Payout",
            key=f"payout_btn_{account.id}",
            type="primary",
            disabled=not can_payout,
            use_container_width=True,
        )
    if clicked:
        try:
            on_update(execute_payout(account, config, amount))
        except PayoutRejectedError as e:
            st.error(str(e))


def _render_payout_history(account: Account, on_update: Callable[[Account], None]) -> None:
    if account.history_payouts:
        df = payout_history_frame(account)
        for idx, row in df.iterrows():
            c_info, c_del = st.columns([5, 1])
            c_info.markdown(
                f"**${row['amount']:,.2f}** → balance ${row['post_balance']:,.2f} · {str(row['date'])[:10]}"
            )
            if c_del.button("✖", key=f"payout_del_{account.id}_{idx}", help="Delete payout record"):
                on_update(account_ops.delete_payout_record(account, int(idx)))
    else:
        st.caption("No payouts yet.")

    with st.form(key=f"manual_payout_form_{account.id}", clear_on_submit=True):
        c_in, c_btn = st.columns([3, 1])
        with c_in:
            raw_amount = st.text_input("Manual payout", placeholder="Amount already withdrawn", key=f"manual_in_{account.id}")
        with c_btn:
            submitted = st.form_submit_button("Record", use_container_width=True)
        if submitted:
            updated = account_ops.add_manual_payout(account, raw_amount)
            if updated is account:
                st.warning("Enter a positive payout amount.")
            else:
                on_update(updated)

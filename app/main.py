import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from fintrack.config import load_settings
from fintrack.domain import CREDIT, DEBT, EXPENSE, INCOME, OVERDUE, PAID, PENDING, RECURRING
from fintrack.errors import FinanceError
from fintrack.frames import (
    category_frame,
    monthly_frame,
    payments_frame,
    shifts_frame,
    transactions_frame,
)
from fintrack.formatting import CURRENCIES, Formatter
from fintrack.notifier import CRITICAL
from fintrack.services import FinanceService

st.set_page_config(page_title="FinanceTracker", layout="wide")

settings = load_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("fintrack.app")

if "service" not in st.session_state:
    st.session_state.service = FinanceService.from_settings(settings)
    logger.info("Started dashboard session")

service: FinanceService = st.session_state.service

STATUS_LABELS = {PAID: "Paid", OVERDUE: "Overdue", PENDING: "Pending"}
TYPE_LABELS = {RECURRING: "Recurring", CREDIT: "Credit", DEBT: "Debt"}
INCOME_CATEGORIES = ["Salary", "Freelance", "Investments", "Other"]
EXPENSE_CATEGORIES = ["Utilities", "Groceries", "Transport", "Entertainment", "Other"]

st.sidebar.markdown("### ⚙️ Settings")
currency = st.sidebar.selectbox(
    "Currency",
    options=list(CURRENCIES),
    index=list(CURRENCIES).index(st.session_state.get("currency", service.formatter.currency)),
    format_func=lambda code: f"{code.upper()} ({CURRENCIES[code][0]})",
)
st.session_state["currency"] = currency
service.formatter = Formatter(currency)
fmt = service.formatter

today = st.sidebar.date_input("Today", value=date.today())

menu = st.sidebar.radio(
    "Menu",
    ["🏠 Dashboard", "📅 Salary", "📈 Income", "📉 Expenses", "💳 Payments", "📊 Reports"],
)


def submit(action, candidate, success):
    try:
        action(candidate)
    except FinanceError as e:
        st.error(str(e))
    else:
        st.success(success)
        st.rerun()


def money_column(df, column):
    return df.assign(**{column: df[column].map(fmt.amount)})


for note in service.notifications(today):
    if note.severity == CRITICAL:
        st.error(f"🔔 {note.message}")
    else:
        st.warning(f"🔔 {note.message}")

if menu == "🏠 Dashboard":
    st.title("👛 FinanceTracker")
    totals = service.totals()
    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Total income", fmt.amount(totals.income))
    with k2:
        st.metric("Total expenses", fmt.amount(totals.expense))
    with k3:
        st.metric("Balance", fmt.amount(totals.balance))

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Recent operations")
        for t in service.recent_transactions():
            sign = "+" if t.type == INCOME else "-"
            st.markdown(f"**{t.description}** · {t.category} · {sign}{fmt.amount(t.amount)}")
    with c2:
        st.subheader("Upcoming payments")
        for p in service.upcoming_payments():
            st.markdown(
                f"**{p.name}** · {fmt.date(p.due_date)} · {STATUS_LABELS[p.status]} · {fmt.amount(p.amount)}"
            )

elif menu == "📅 Salary":
    st.title("📅 Salary")
    reference = st.date_input("Pay periods for month of", value=today)
    cols = st.columns(2)
    titles = {1: "Period 1 (30-14)", 2: "Period 2 (15-29)"}
    for col, period in zip(cols, service.salary_periods(reference)):
        with col:
            st.metric(titles[period.period], fmt.amount(period.total))
            st.caption(f"{period.shift_count} shifts · paid on day {period.payout_day}")

    with st.form("add_shift"):
        st.subheader("Add shift")
        shift_date = st.date_input("Date", value=today)
        hours = st.number_input("Hours", min_value=0.0, value=8.0, step=0.5)
        rate = st.number_input("Hourly rate", min_value=0.0, value=800.0, step=50.0)
        bonus = st.number_input("Bonus", min_value=0.0, value=0.0, step=100.0)
        deductions = st.number_input("Deductions", min_value=0.0, value=0.0, step=100.0)
        if st.form_submit_button("Save shift"):
            submit(
                service.submit_shift,
                {
                    "date": shift_date,
                    "hours": hours,
                    "hourly_rate": rate,
                    "bonus": bonus or None,
                    "deductions": deductions or None,
                },
                "Shift saved",
            )

    df = shifts_frame(service.store.list_shifts())
    if not df.empty:
        disp = df.drop(columns=["id"]).assign(date=df["date"].dt.strftime("%d.%m.%Y"))
        for column in ("hourly_rate", "bonus", "deductions", "total"):
            disp[column] = disp[column].map(lambda v: "—" if pd.isna(v) else fmt.amount(v))
        st.table(disp.reset_index(drop=True))
    else:
        st.info("No shifts yet.")

elif menu in ("📈 Income", "📉 Expenses"):
    kind = INCOME if menu == "📈 Income" else EXPENSE
    st.title(menu)

    with st.form(f"add_{kind}"):
        category = st.selectbox("Category", INCOME_CATEGORIES if kind == INCOME else EXPENSE_CATEGORIES)
        amount = st.number_input("Amount", min_value=0.0, value=0.0, step=100.0)
        description = st.text_input("Description")
        when = st.date_input("Date", value=today)
        if st.form_submit_button("Add"):
            submit(
                service.submit_transaction,
                {"type": kind, "category": category, "amount": amount, "description": description, "date": when},
                "Transaction added",
            )

    df = transactions_frame(service.transactions_of(kind))
    if not df.empty:
        disp = money_column(df.drop(columns=["id", "type"]), "amount")
        disp["date"] = df["date"].dt.strftime("%d.%m.%Y")
        st.table(disp.reset_index(drop=True))
        csv = df.to_csv(index=False)
        st.download_button("⬇ Download CSV", csv, file_name=f"{kind}.csv", mime="text/csv")
    else:
        st.info("No transactions to display.")

elif menu == "💳 Payments":
    st.title("💳 Payments")

    with st.form("add_payment"):
        name = st.text_input("Name")
        amount = st.number_input("Amount", min_value=0.0, value=0.0, step=100.0)
        due = st.date_input("Due date", value=today)
        ptype = st.selectbox("Type", list(TYPE_LABELS), format_func=TYPE_LABELS.get)
        if st.form_submit_button("Add payment"):
            submit(
                service.submit_payment,
                {"name": name, "amount": amount, "due_date": due, "type": ptype},
                "Payment added",
            )

    for p in service.store.list_payments():
        c1, c2, c3, c4, c5 = st.columns([3, 2, 2, 2, 1])
        c1.markdown(f"**{p.name}** · {TYPE_LABELS[p.type]}")
        c2.markdown(fmt.amount(p.amount))
        c3.markdown(fmt.date(p.due_date))
        c4.markdown(STATUS_LABELS[p.status])
        if p.status != PAID and c5.button("✔", key=f"pay_{p.id}"):
            submit(service.mark_paid, p.id, f"{p.name} marked as paid")

    df = payments_frame(service.store.list_payments())
    if not df.empty:
        by_type = df.groupby("type", as_index=False)["amount"].sum()
        fig = px.bar(by_type, x="type", y="amount", title="Payments by type", template="plotly_dark")
        st.plotly_chart(fig, use_container_width=True)

elif menu == "📊 Reports":
    st.title("📊 Reports")
    c1, c2 = st.columns(2)
    with c1:
        shares = service.category_shares(EXPENSE)
        if shares:
            df_cat = category_frame(shares)
            fig_cat = px.pie(df_cat, values="total", names="category", title="Expense structure")
            st.plotly_chart(fig_cat, use_container_width=True)
            for row in shares:
                st.markdown(f"{row.category}: **{fmt.amount(row.total)}** ({row.percentage}%)")
                st.progress(min(100, int(row.percentage)) / 100)
        else:
            st.info("No expenses recorded.")
    with c2:
        monthly = monthly_frame(service.monthly_breakdown())
        if not monthly.empty:
            fig_ts = go.Figure()
            fig_ts.add_trace(go.Bar(x=monthly["period"], y=monthly["income"], name="Income"))
            fig_ts.add_trace(go.Bar(x=monthly["period"], y=monthly["expense"], name="Expenses"))
            fig_ts.update_layout(template="plotly_dark", barmode="group", title="By month")
            st.plotly_chart(fig_ts, use_container_width=True)
            disp = monthly.copy()
            for column in ("income", "expense", "net"):
                disp = money_column(disp, column)
            st.table(disp)
        else:
            st.info("No transactions recorded.")

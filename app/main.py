"""
Streamlit Frontend for the Personal Finance Tracker

This is the graphical interface over the same FinanceApp flows the
console menu uses.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Clear error messages in simple language
3. Every change is saved immediately
4. No hidden actions

Run with:  streamlit run app/main.py
"""

import pandas as pd
import streamlit as st

from finance_tracker.audit import configure_logging
from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.errors import FinanceError
from finance_tracker.models.finance import BudgetStatus
from finance_tracker.orchestrator import FinanceApp, create_app
from finance_tracker.reports import EXCEEDED_BANNER, NO_BUDGETS_BANNER, format_amount


# Page configuration
st.set_page_config(
    page_title="Personal Finance Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


def get_app() -> FinanceApp:
    """Get or create this browser session's FinanceApp."""
    if "finance_app" not in st.session_state:
        configure_logging(get_settings().app.effective_log_level)
        try:
            st.session_state.finance_app = create_app()
        except FinanceError as e:
            st.error(f"Failed to load saved data: {e}")
            st.stop()
    return st.session_state.finance_app


def main():
    """Main application entry point."""
    app = get_app()

    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.markdown("---")
    render_settings_status()

    if not app.is_logged_in:
        render_auth_page(app)
        return

    st.sidebar.markdown(f"Logged in as **{app.current_username}**")
    page = st.sidebar.radio(
        "Navigate to:",
        ["📋 Transactions", "🎯 Budgets", "📊 Reports", "🕑 Activity"],
        index=0,
    )

    st.sidebar.markdown("---")
    if st.sidebar.button("🚪 Logout"):
        app.logout()
        st.rerun()

    if page == "📋 Transactions":
        render_transactions_page(app)
    elif page == "🎯 Budgets":
        render_budgets_page(app)
    elif page == "📊 Reports":
        render_reports_page(app)
    elif page == "🕑 Activity":
        render_activity_page(app)


def render_settings_status():
    """Show which configuration sections loaded cleanly."""
    status = validate_all_settings()

    sections = [
        ("Storage", "storage"),
        ("Reports", "reports"),
        ("Application", "app"),
    ]

    with st.sidebar.expander("⚙️ Configuration", expanded=not all(status.get(key) for _, key in sections)):
        for name, key in sections:
            if status.get(key, False):
                st.success(f"✅ {name}")
            else:
                st.error(f"❌ {name}: {status.get(f'{key}_error', 'invalid')}")
        if status.get("app") and status.get("storage") and get_settings().app.debug_mode:
            st.caption(f"Debug mode on. Data file: {get_settings().storage.data_file}")


def render_auth_page(app: FinanceApp):
    """Render the login/register page."""
    st.title("Personal Finance Tracker")

    login_tab, register_tab = st.tabs(["Login", "Register"])

    with login_tab:
        with st.form("login_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Login", type="primary")
        if submitted:
            try:
                app.login(username, password)
                st.rerun()
            except FinanceError as e:
                st.error(str(e))

    with register_tab:
        with st.form("register_form"):
            username = st.text_input("Choose Username")
            password = st.text_input("Choose Password", type="password")
            submitted = st.form_submit_button("Register", type="primary")
        if submitted:
            try:
                app.register(username, password)
                st.rerun()
            except FinanceError as e:
                st.error(str(e))


def render_transactions_page(app: FinanceApp):
    """Render the transaction list with add/edit/delete."""
    st.title("📋 Transactions")

    with st.expander("➕ Add Transaction", expanded=False):
        with st.form("add_transaction_form", clear_on_submit=True):
            col1, col2 = st.columns(2)
            with col1:
                date = st.text_input("Date (YYYY-MM-DD)")
                category = st.text_input("Category")
                description = st.text_input("Description")
            with col2:
                amount = st.text_input("Amount")
                tx_type = st.radio("Type", ["Expense", "Income"], horizontal=True)
            submitted = st.form_submit_button("Add", type="primary")
        if submitted:
            try:
                transaction = app.add_transaction(date, category, description, amount, tx_type)
                st.success(f"Transaction added successfully! (ID {transaction.id})")
            except FinanceError as e:
                st.error(str(e))

    category_filter = st.text_input("Filter by category", placeholder="All categories")
    transactions = app.transactions(category_filter.strip() or None)

    if transactions:
        st.dataframe(
            pd.DataFrame([
                {
                    "ID": t.id,
                    "Date": t.date,
                    "Category": t.category,
                    "Description": t.description,
                    "Type": t.type.label,
                    "Amount": float(t.amount),
                }
                for t in transactions
            ]),
            hide_index=True,
            use_container_width=True,
        )
    else:
        st.info("No transactions yet. Use 'Add Transaction' to record one.")
        return

    st.markdown("---")
    st.subheader("✏️ Edit or Delete")
    st.markdown("*Leave a field blank to keep its current value*")

    selected_id = st.selectbox("Transaction ID", [t.id for t in transactions])
    with st.form("edit_transaction_form"):
        col1, col2 = st.columns(2)
        with col1:
            new_date = st.text_input("New Date")
            new_category = st.text_input("New Category")
            new_description = st.text_input("New Description")
        with col2:
            new_amount = st.text_input("New Amount")
            new_type = st.text_input("New Type (I/E)")
        save_col, delete_col = st.columns(2)
        with save_col:
            save = st.form_submit_button("✅ Save Changes", type="primary")
        with delete_col:
            delete = st.form_submit_button("🗑️ Delete")

    if save:
        try:
            result = app.edit_transaction(
                selected_id,
                date=new_date,
                category=new_category,
                description=new_description,
                amount_text=new_amount,
                type_text=new_type,
            )
            st.success("Transaction updated successfully!")
            for error in result.errors:
                st.warning(f"Not changed ({error.field}): {error.message}")
        except FinanceError as e:
            st.error(str(e))
    elif delete:
        try:
            app.delete_transaction(selected_id)
            st.success("Transaction deleted successfully!")
            st.rerun()
        except FinanceError as e:
            st.error(str(e))


def render_budgets_page(app: FinanceApp):
    """Render budget setting and the budget report."""
    st.title("🎯 Budgets")

    with st.form("set_budget_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            category = st.text_input("Category", placeholder="e.g., Food, Transport")
        with col2:
            amount = st.text_input("Budget Amount")
        submitted = st.form_submit_button("Set Budget", type="primary")
    if submitted:
        try:
            value = app.set_budget(category, amount)
            st.success(f"Budget for {category.strip()} set to ${format_amount(value)}")
        except FinanceError as e:
            st.error(str(e))

    report = app.budget_report()
    if report.no_budgets:
        st.info(NO_BUDGETS_BANNER)
        return

    for line in report.lines:
        text = (
            f"**{line.category}**: Budget = ${format_amount(line.budgeted)}, "
            f"Spent = ${format_amount(line.spent)}"
        )
        if line.status is BudgetStatus.EXCEEDED:
            st.error(text)
        elif line.status is BudgetStatus.WARNING:
            st.warning(text)
        else:
            st.success(text)

    if report.any_exceeded:
        st.error(EXCEEDED_BANNER)


def render_reports_page(app: FinanceApp):
    """Render the summary and time-series reports."""
    st.title("📊 Reports")

    summary = app.summary()
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Income", f"${format_amount(summary.total_income)}")
    col2.metric("Total Expense", f"${format_amount(summary.total_expense)}")
    col3.metric("Net Balance", f"${format_amount(summary.net)}")

    expenses = app.expenses_by_category()
    if expenses:
        st.subheader("Expenses by Category")
        st.bar_chart(pd.Series({k: float(v) for k, v in expenses.items()}, name="Expense"))

    series = app.time_series_report()

    st.subheader("Monthly Summary")
    if series.monthly:
        monthly = pd.DataFrame([
            {
                "Period": p.period,
                "Income": float(p.income),
                "Expense": float(p.expense),
                "Net": float(p.net),
            }
            for p in series.monthly
        ]).set_index("Period")
        st.line_chart(monthly[["Income", "Expense"]])
        st.dataframe(monthly, use_container_width=True)
    else:
        st.info("No dated transactions yet.")

    st.subheader("Yearly Summary")
    if series.yearly:
        st.dataframe(
            pd.DataFrame([
                {
                    "Year": p.period,
                    "Income": float(p.income),
                    "Expense": float(p.expense),
                    "Net": float(p.net),
                }
                for p in series.yearly
            ]).set_index("Year"),
            use_container_width=True,
        )


def render_activity_page(app: FinanceApp):
    """Render the recent audit events for the current user."""
    st.title("🕑 Recent Activity")

    events = app.audit_logger.recent_events(username=app.current_username, limit=50)
    if not events:
        st.info("No activity recorded in this session.")
        return

    for event in events:
        details = ", ".join(f"{key}: {value}" for key, value in event.details.items())
        st.markdown(
            f"`{event.timestamp.strftime('%Y-%m-%d %H:%M:%S')}` {event.description}"
            + (f" ({details})" if details else "")
        )


if __name__ == "__main__":
    main()

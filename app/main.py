"""
Streamlit Frontend for Freelancer Dashboard

Pages: login/register, overview, clients, projects, statistics, settings.

DESIGN PRINCIPLES:
1. The UI only calls SessionManager commands, it never touches storage
2. Required fields are checked before a command runs
3. A failed save is shown to the user, the change is not kept
4. Statistics are recomputed on every render
"""

from datetime import date
from typing import Optional

import streamlit as st

from freelancer_dashboard.config import get_settings, validate_all_settings
from freelancer_dashboard.models.client import Client, ClientDraft, LeadSource
from freelancer_dashboard.models.project import (
    Project,
    ProjectDraft,
    ProjectFilters,
    ProjectStatus,
)
from freelancer_dashboard.models.statistics import TimeFilter
from freelancer_dashboard.orchestrator import create_app_components, create_store
from freelancer_dashboard.queries.statistics import format_currency
from freelancer_dashboard.services.storage import JsonFileKeyValueStore, StorageError
from freelancer_dashboard.session import IncorrectPasswordError, SessionManager
from freelancer_dashboard.validation import FormValidator


# Page configuration
st.set_page_config(
    page_title="Freelancer Dashboard",
    page_icon="💼",
    layout="wide",
    initial_sidebar_state="expanded",
)

TIME_FILTER_LABELS = {
    TimeFilter.ALL: "All Time",
    TimeFilter.YEAR: "This Year",
    TimeFilter.QUARTER: "This Quarter",
    TimeFilter.MONTH: "This Month",
}

validator = FormValidator()


@st.cache_resource
def get_store():
    """One key-value store shared by every browser session (cached)."""
    return create_store()


def get_session_manager() -> SessionManager:
    """Per-browser-session manager, resumed from the stored marker on first use."""
    if "session_manager" not in st.session_state:
        manager, _ = create_app_components(store=get_store())
        manager.resume()
        st.session_state.session_manager = manager
    return st.session_state.session_manager


def money(amount: float) -> str:
    return format_currency(amount, symbol=get_settings().app.currency_symbol)


def show_errors(messages: list[str]) -> None:
    for message in messages:
        st.error(message)


def main():
    """Main application entry point."""
    manager = get_session_manager()

    if not manager.is_logged_in:
        render_login_page(manager)
        return

    st.sidebar.title("💼 Freelancer Dashboard")
    st.sidebar.caption(f"Logged in as **{manager.current_user}**")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📋 Dashboard", "👥 Clients", "📁 Projects", "📊 Statistics", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    if st.sidebar.button("🚪 Logout"):
        try:
            manager.logout()
        except StorageError as e:
            st.sidebar.error(f"Could not clear the saved login: {e}")
        st.rerun()

    if page == "📋 Dashboard":
        render_overview_page(manager)
    elif page == "👥 Clients":
        render_clients_page(manager)
    elif page == "📁 Projects":
        render_projects_page(manager)
    elif page == "📊 Statistics":
        render_statistics_page(manager)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_login_page(manager: SessionManager):
    """Login doubles as registration for unknown usernames."""
    st.title("Login / Register")

    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login / Register", type="primary")

    if not submitted:
        return

    result = validator.validate_login(username, password)
    if not result.is_valid:
        show_errors(result.messages)
        return

    try:
        manager.login(username.strip(), password)
    except IncorrectPasswordError:
        st.error("Incorrect password")
        return
    except StorageError as e:
        st.error(f"Could not save login: {e}")
        return
    st.rerun()


def render_stat_cards(manager: SessionManager):
    stats = manager.dashboard_stats()
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Earnings", money(stats.total_earnings))
    col2.metric("Projects Completed", str(stats.projects_completed))
    col3.metric("Total Clients", str(stats.total_clients))
    col4.metric("Average Project Value", money(stats.average_project_value))


def render_overview_page(manager: SessionManager):
    st.title("📋 Dashboard")
    render_stat_cards(manager)

    st.markdown("---")
    st.subheader("Open Projects")
    open_projects = [p for p in manager.list_projects() if not p.is_completed]
    if not open_projects:
        st.info("No open projects. Add one on the Projects page.")
        return

    open_projects.sort(key=lambda p: p.deadline)
    st.dataframe(
        [
            {
                "Project": p.name,
                "Client": manager.client_name_for(p),
                "Status": p.status.value,
                "Deadline": p.deadline.isoformat(),
                "Fee": money(p.fee),
            }
            for p in open_projects
        ],
        use_container_width=True,
        hide_index=True,
    )


# =============================================================================
# CLIENTS
# =============================================================================

def render_client_form(manager: SessionManager, existing: Optional[Client] = None):
    lead_options = [None] + list(LeadSource)

    with st.form(f"client_form_{existing.id if existing else 'new'}", clear_on_submit=existing is None):
        name = st.text_input("Client Name *", value=existing.name if existing else "")
        email = st.text_input("Email *", value=existing.email if existing else "")
        phone = st.text_input("Phone *", value=existing.phone if existing else "")
        lead = st.selectbox(
            "Lead Source",
            options=lead_options,
            index=lead_options.index(existing.lead) if existing else 0,
            format_func=lambda x: "Select lead source" if x is None else x.value,
        )
        submitted = st.form_submit_button("Update Client" if existing else "Add Client")

    if not submitted:
        return

    result = validator.validate_client(name, email, phone)
    if not result.is_valid:
        show_errors(result.messages)
        return

    try:
        if existing:
            manager.update_client(
                Client(id=existing.id, name=name, email=email, phone=phone, lead=lead)
            )
            st.session_state.editing_client_id = None
        else:
            manager.create_client(ClientDraft(name=name, email=email, phone=phone, lead=lead))
    except StorageError as e:
        st.error(f"Could not save client: {e}")
        return
    st.rerun()


def render_clients_page(manager: SessionManager):
    st.title("👥 Clients")

    with st.expander("➕ Add New Client"):
        render_client_form(manager)

    editing_id = st.session_state.get("editing_client_id")
    if editing_id is not None:
        client = manager.get_client(editing_id)
        if client:
            st.subheader(f"Edit Client: {client.name}")
            render_client_form(manager, existing=client)
            if st.button("Cancel edit", key="cancel_client_edit"):
                st.session_state.editing_client_id = None
                st.rerun()

    st.subheader("Client List")
    clients = manager.list_clients()
    if not clients:
        st.info("No clients yet.")
        return

    header = st.columns([3, 3, 2, 2, 1, 1])
    for col, label in zip(header, ["Name", "Email", "Phone", "Lead Source", "", ""]):
        col.markdown(f"**{label}**")

    for client in clients:
        cols = st.columns([3, 3, 2, 2, 1, 1])
        cols[0].write(client.name)
        cols[1].write(client.email)
        cols[2].write(client.phone)
        cols[3].write(client.lead.value if client.lead else "")
        if cols[4].button("✏️", key=f"edit_client_{client.id}"):
            st.session_state.editing_client_id = client.id
            st.rerun()
        if cols[5].button("🗑️", key=f"delete_client_{client.id}"):
            try:
                manager.delete_client(client.id)
            except StorageError as e:
                st.error(f"Could not delete client: {e}")
            else:
                st.rerun()


# =============================================================================
# PROJECTS
# =============================================================================

def render_project_form(manager: SessionManager, existing: Optional[Project] = None):
    clients = manager.list_clients()
    client_options = [None] + [c.id for c in clients]
    client_names = {c.id: c.name for c in clients}
    statuses = list(ProjectStatus)

    client_index = 0
    if existing and existing.client_id in client_names:
        client_index = client_options.index(existing.client_id)

    with st.form(f"project_form_{existing.id if existing else 'new'}", clear_on_submit=existing is None):
        name = st.text_input("Project Name *", value=existing.name if existing else "")
        client_id = st.selectbox(
            "Client",
            options=client_options,
            index=client_index,
            format_func=lambda x: "Select client" if x is None else client_names[x],
        )
        status = st.selectbox(
            "Status",
            options=statuses,
            index=statuses.index(existing.status) if existing else 0,
            format_func=lambda x: x.value,
        )
        deadline = st.date_input("Deadline *", value=existing.deadline if existing else date.today())
        fee = st.number_input("Project Fee *", value=float(existing.fee) if existing else 0.0, step=50.0)
        submitted = st.form_submit_button("Update Project" if existing else "Add Project")

    if not submitted:
        return

    result = validator.validate_project(name, deadline, fee, client_id)
    if not result.is_valid:
        show_errors(result.messages)
        return

    # A project without a client keeps id 0, which never matches a client
    if client_id is None:
        client_id = existing.client_id if existing else 0

    try:
        if existing:
            manager.update_project(Project(
                id=existing.id,
                name=name,
                client_id=client_id,
                status=status,
                deadline=deadline,
                fee=fee,
            ))
            st.session_state.editing_project_id = None
        else:
            manager.create_project(ProjectDraft(
                name=name,
                client_id=client_id,
                status=status,
                deadline=deadline,
                fee=fee,
            ))
    except StorageError as e:
        st.error(f"Could not save project: {e}")
        return
    st.rerun()


def render_project_filters(manager: SessionManager) -> Optional[ProjectFilters]:
    clients = manager.list_clients()
    client_names = {c.id: c.name for c in clients}

    with st.expander("🔎 Filter Projects"):
        col1, col2, col3, col4 = st.columns(4)
        status = col1.selectbox(
            "Status",
            options=["all"] + [s.value for s in ProjectStatus],
            format_func=lambda x: "All" if x == "all" else x,
        )
        client_id = col2.selectbox(
            "Client",
            options=["all"] + list(client_names),
            format_func=lambda x: "All" if x == "all" else client_names[x],
        )
        min_fee = col3.text_input("Minimum Fee")
        max_fee = col4.text_input("Maximum Fee")

    try:
        return ProjectFilters(status=status, client_id=client_id, min_fee=min_fee, max_fee=max_fee)
    except ValueError:
        st.error("Fee filters must be numbers")
        return None


def render_projects_page(manager: SessionManager):
    st.title("📁 Projects")

    with st.expander("➕ Add New Project"):
        render_project_form(manager)

    editing_id = st.session_state.get("editing_project_id")
    if editing_id is not None:
        project = manager.get_project(editing_id)
        if project:
            st.subheader(f"Edit Project: {project.name}")
            render_project_form(manager, existing=project)
            if st.button("Cancel edit", key="cancel_project_edit"):
                st.session_state.editing_project_id = None
                st.rerun()

    filters = render_project_filters(manager)
    if filters is None:
        return

    st.subheader("Project List")
    projects = manager.list_projects(filters)
    if not projects:
        st.info("No projects match.")
        return

    widths = [3, 2, 2, 2, 2, 1, 1, 2]
    header = st.columns(widths)
    for col, label in zip(header, ["Project Name", "Client", "Status", "Deadline", "Fee", "", "", ""]):
        col.markdown(f"**{label}**")

    for project in projects:
        cols = st.columns(widths)
        cols[0].write(project.name)
        cols[1].write(manager.client_name_for(project))
        cols[2].write(project.status.value)
        cols[3].write(project.deadline.isoformat())
        cols[4].write(money(project.fee))
        if cols[5].button("✏️", key=f"edit_project_{project.id}"):
            st.session_state.editing_project_id = project.id
            st.rerun()
        if cols[6].button("🗑️", key=f"delete_project_{project.id}"):
            run_project_command(manager.delete_project, project.id)
        toggle_label = "↩️ Reopen" if project.is_completed else "✅ Complete"
        if cols[7].button(toggle_label, key=f"toggle_project_{project.id}"):
            run_project_command(manager.toggle_project_completion, project.id)


def run_project_command(command, project_id: int) -> None:
    try:
        command(project_id)
    except StorageError as e:
        st.error(f"Could not save project: {e}")
        return
    st.rerun()


# =============================================================================
# STATISTICS AND SETTINGS
# =============================================================================

def render_statistics_page(manager: SessionManager):
    col1, col2 = st.columns([3, 1])
    col1.title("📊 Statistics")
    time_filter = col2.selectbox(
        "Time period",
        options=list(TimeFilter),
        format_func=lambda x: TIME_FILTER_LABELS[x],
    )

    render_stat_cards(manager)

    st.markdown("---")
    title = "Earnings" if time_filter == TimeFilter.ALL else f"Earnings ({time_filter.value})"
    st.subheader(title)

    rows = manager.earnings(time_filter)
    if not rows:
        st.info("No completed projects in this period.")
        return

    st.dataframe(
        [{"Period": row.period_label, "Earnings": money(row.earnings)} for row in rows],
        use_container_width=True,
        hide_index=True,
    )


def render_settings_page():
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")
    status = validate_all_settings()
    for name, key in [("Storage", "storage"), ("Application", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name} settings loaded")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'Not configured')}")

    app_settings = get_settings().app
    st.markdown(
        f"Environment: `{app_settings.app_environment}` · "
        f"log level: `{app_settings.effective_log_level}`"
    )

    st.markdown("### Storage")
    store = get_store()
    if isinstance(store, JsonFileKeyValueStore):
        st.markdown(f"Data is kept in `{store.path.resolve()}`.")
    else:
        st.warning("Data is kept in memory and is lost when the app stops.")

    st.markdown(
        "To change these, set `STORAGE_BACKEND`, `STORAGE_DATA_FILE`, `LOG_LEVEL` "
        "or `CURRENCY_SYMBOL` in the environment or a `.env` file."
    )


if __name__ == "__main__":
    main()

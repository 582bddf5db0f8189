# Web framework and data display
import streamlit as st

from userhub_web.client import ApiClient, ApiError
from userhub_web.tables import users_frame

st.set_page_config(page_title="Userhub", page_icon="👥", layout="wide")

# Initialize session state for user authentication
if 'user_token' not in st.session_state:
    st.session_state.user_token = None
if 'user' not in st.session_state:
    st.session_state.user = None


def api() -> ApiClient:
    return ApiClient(token=st.session_state.user_token)


def store_auth(data):
    st.session_state.user_token = data["token"]
    st.session_state.user = data["user"]


def clear_auth():
    st.session_state.user_token = None
    st.session_state.user = None


def login_user(email: str, password: str) -> bool:
    try:
        store_auth(api().login(email, password))
        return True
    except ApiError as e:
        st.error(f"Login failed: {e.describe()}")
        return False


def register_user(name: str, email: str, password: str, password_confirmation: str) -> bool:
    try:
        store_auth(api().register(name, email, password, password_confirmation))
        return True
    except ApiError as e:
        st.error(f"Registration failed: {e.describe()}")
        return False


def logout_user():
    try:
        api().logout()
    except ApiError as e:
        # Local state is cleared regardless, the token is useless either way
        st.warning(f"Logout API error: {e.message}")
    finally:
        clear_auth()


def handle_auth_error(e: ApiError):
    if e.status_code == 401:
        clear_auth()
        st.warning("Your session has expired. Please log in again.")
        st.rerun()
    st.error(e.describe())


# Show login/signup if not authenticated
if not st.session_state.user_token:
    st.title("Welcome to Userhub")
    tab1, tab2 = st.tabs(["Login", "Sign Up"])

    with tab1:
        st.header("Login")
        login_email = st.text_input("Email", key="login_email")
        login_password = st.text_input("Password", type="password", key="login_password")
        if st.button("Login"):
            if login_user(login_email, login_password):
                st.success("Logged in successfully!")
                st.rerun()

    with tab2:
        st.header("Sign Up")
        reg_name = st.text_input("Name", key="reg_name")
        reg_email = st.text_input("Email", key="reg_email")
        reg_password = st.text_input("Password", type="password", key="reg_password")
        reg_confirmation = st.text_input("Confirm password", type="password", key="reg_confirmation")
        if st.button("Register"):
            if register_user(reg_name, reg_email, reg_password, reg_confirmation):
                st.success("Registration successful!")
                st.rerun()
    st.stop()

# Sidebar: who is logged in and the logout button
user = st.session_state.user
st.sidebar.write(f"Logged in as: {user['name']} ({user['email']})")
if st.sidebar.button("Refresh token"):
    try:
        st.session_state.user_token = api().refresh()
        st.sidebar.success("Token refreshed")
    except ApiError as e:
        handle_auth_error(e)
if st.sidebar.button("Logout"):
    logout_user()
    st.rerun()

page = st.sidebar.radio("Page", ["Welcome", "Users"])

# ---------------------------
# Welcome page
# ---------------------------
if page == "Welcome":
    st.title(f"Welcome back, {user['name']}! 👋")

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Your account")
        st.write(f"**User ID:** #{user['id']}")
        st.write(f"**Name:** {user['name']}")
        st.write(f"**Email:** {user['email']}")

    with col2:
        st.subheader("System statistics")
        try:
            stats = api().stats()
            st.metric("Total users", stats["total_users"])
            st.metric("New users today", stats["new_users_today"])
            st.metric("Active users", stats["active_users"])
        except ApiError as e:
            handle_auth_error(e)

# ---------------------------
# Users page
# ---------------------------
else:
    st.title("👥 Users")

    query = st.text_input("Search by name or email")
    try:
        users = api().search_users(query) if query else api().list_users()
    except ApiError as e:
        handle_auth_error(e)
        users = []

    if users:
        st.dataframe(users_frame(users), hide_index=True, use_container_width=True)
    else:
        st.info("No users found.")

    create_tab, edit_tab, delete_tab = st.tabs(["Create", "Edit", "Delete"])

    with create_tab:
        with st.form("create_user", clear_on_submit=True):
            new_name = st.text_input("Name")
            new_email = st.text_input("Email")
            new_password = st.text_input("Password", type="password")
            if st.form_submit_button("Create user"):
                try:
                    created = api().create_user(new_name, new_email, new_password)
                    st.success(f"User #{created['id']} created")
                    st.rerun()
                except ApiError as e:
                    handle_auth_error(e)

    user_ids = [u["id"] for u in users]

    with edit_tab:
        if user_ids:
            edit_id = st.selectbox("User", user_ids, key="edit_id")
            try:
                current = api().get_user(edit_id)
            except ApiError as e:
                handle_auth_error(e)
                current = {"name": "", "email": ""}
            with st.form("edit_user"):
                edit_name = st.text_input("New name (leave empty to keep)", placeholder=current["name"])
                edit_email = st.text_input("New email (leave empty to keep)", placeholder=current["email"])
                edit_password = st.text_input("New password (leave empty to keep)", type="password")
                if st.form_submit_button("Save changes"):
                    try:
                        api().update_user(edit_id, name=edit_name, email=edit_email, password=edit_password)
                        st.success("User updated")
                        st.rerun()
                    except ApiError as e:
                        handle_auth_error(e)

    with delete_tab:
        if user_ids:
            delete_id = st.selectbox("User", user_ids, key="delete_id")
            if st.button("Delete user", type="primary"):
                try:
                    api().delete_user(delete_id)
                    if delete_id == user["id"]:
                        clear_auth()
                    st.success("User deleted")
                    st.rerun()
                except ApiError as e:
                    handle_auth_error(e)

import pandas as pd

USER_COLUMNS = ["id", "name", "email", "created_at"]


def users_frame(users):
    """Users list from the API as a DataFrame ready for st.dataframe."""
    if not users:
        return pd.DataFrame(columns=["ID", "Name", "Email", "Created"])

    df = pd.DataFrame(users)[USER_COLUMNS]
    df["created_at"] = pd.to_datetime(df["created_at"]).dt.date
    return df.rename(columns={"id": "ID", "name": "Name", "email": "Email", "created_at": "Created"})

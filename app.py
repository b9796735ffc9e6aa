# app.py
# streamlit ui for the campus café quote page

import logging
import streamlit as st

# bring in data and pricing functions from helper module
from cafelib import (
    PRICING,
    QuoteError,
    build_request,
    compute_quote,
    format_receipt,
    money,
    normalize_type,
    percent,
)
from weather import weather_line

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("cafe.app")

NO_ORDER = "No order data."


# weather barely changes, so only ask the API every 10 minutes
@st.cache_data(ttl=600, show_spinner=False)
def cached_weather():
    return weather_line()


# page header
st.set_page_config(page_title="Campus Café - get a quote", layout="centered")
st.title("Campus Café")
st.caption(" · ".join(f"{item} {money(price)}" for item, price in PRICING.prices.items()))

# sidebar: weather and the house rules
with st.sidebar:
    st.header("Today")
    st.write(cached_weather())
    st.write(f"Student discount: {percent(PRICING.student_rate)}% off")
    st.write(f"Reusable cup (coffee): +{money(PRICING.eco_fee)}")
    st.write(f"Bulk deal: {money(PRICING.bulk_off)} off {PRICING.bulk_qty}+ items")
    st.write(f"Tax: {percent(PRICING.tax_rate)}%")

# receipt text lives in session_state so it survives reruns
if "display" not in st.session_state:
    st.session_state["display"] = NO_ORDER

# inputs
st.subheader("Your order")
st.text_input("Enter item type: coffee / sandwich / salad", key="item")
st.text_input("Enter quantity (1–10):", key="qty")
st.checkbox(f"Student discount? ({percent(PRICING.student_rate)}% off)", key="student")
# the cup question only applies to coffee
st.checkbox(
    f"Add reusable cup? (+{money(PRICING.eco_fee)})",
    key="eco_cup",
    help="Coffee only.",
    disabled=normalize_type(st.session_state.get("item")) != "coffee",
)


def _get_quote():
    try:
        request = build_request(
            st.session_state.get("item"),
            st.session_state.get("qty"),
            student=st.session_state.get("student", False),
            eco_cup=st.session_state.get("eco_cup", False),
        )
        calc = compute_quote(request)
    except QuoteError as e:
        st.session_state["display"] = f"ERROR: {e}"
        return
    logger.info("Quote for %s x%d: %s", request.item, request.quantity, money(calc.total))
    st.session_state["display"] = format_receipt(request, calc)


def _reset():
    st.session_state["display"] = NO_ORDER


cols = st.columns(2)
with cols[0]:
    st.button("Get quote", on_click=_get_quote, type="primary")
with cols[1]:
    st.button("Reset", on_click=_reset)

# receipt
st.subheader("Receipt")
st.code(st.session_state["display"], language=None)

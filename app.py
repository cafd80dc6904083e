from __future__ import annotations

from typing import List, Sequence

import matplotlib.pyplot as plt
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from dividends import (
    CurrencyNormalizer,
    EXCHANGE_RATES_TO_USD,
    DividendDataService,
    Holding,
    HoldingsRepository,
    MessageLevel,
    ServiceMessage,
    Settings,
    TTLCache,
    analyze_low_months,
    calculate_portfolio_value,
    calculate_year_end_value,
    project_scenarios,
    random_example_holdings,
    suggest_stocks,
)
from dividends.config import REPORTING_CURRENCY
from dividends.logging_utils import configure_logging
from dividends.reporting import monthly_totals_frame, payments_frame, shares_frame
from dividends.services import format_frequency
from dividends.utils import clean_stock_name

configure_logging()

# ------------------ Page config ------------------ #
st.set_page_config(page_title="Dividend Income Forecast", layout="centered")
st.title("💰 Dividend Income Forecast")

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


# ------------------ Helpers ------------------ #
def _hex_to_rgb(hexstr: str):
    h = hexstr.lstrip("#")
    if len(h) != 6:
        return None
    try:
        return tuple(int(h[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return None


def _theme_is_dark(force: bool | None = None) -> bool:
    if force is not None:
        return force

    base = st.get_option("theme.base")
    if isinstance(base, str):
        return base.lower() == "dark"

    bg = st.get_option("theme.backgroundColor")
    if isinstance(bg, str):
        rgb = _hex_to_rgb(bg)
        if rgb:
            r, g, b = rgb
            return 0.2126 * r + 0.7152 * g + 0.0722 * b < 128

    return False


def _display_messages(messages: Sequence[ServiceMessage], *, stop_on_error: bool = False) -> None:
    has_error = False
    for message in messages:
        if message.level == MessageLevel.ERROR:
            st.error(message.text)
            has_error = True
        elif message.level == MessageLevel.WARNING:
            st.warning(message.text)
        else:
            st.info(message.text)
    if stop_on_error and has_error:
        st.stop()


@st.cache_resource
def _data_service(ttl_seconds: int, workers: int) -> DividendDataService:
    return DividendDataService(cache=TTLCache(ttl_seconds), max_workers=workers)


def _portfolio_builder(service: DividendDataService) -> List[Holding]:
    """Sidebar flow for adding stocks by search or from the example pool."""

    manual: List[Holding] = st.session_state.setdefault("manual_holdings", [])
    st.sidebar.header("Build a portfolio")

    query = st.sidebar.text_input("Search ticker or company")
    results = service.search(query) if query else []
    if query and not results:
        st.sidebar.caption("No matches.")

    if results:
        picked = st.sidebar.selectbox(
            "Matches",
            options=results,
            format_func=lambda r: f"{r.ticker} · {r.name}" + (f" ({r.exchange})" if r.exchange else ""),
        )
        info = service.dividend_info(picked.ticker)
        if info.has_dividends:
            st.sidebar.caption(f"Pays {format_frequency(info.frequency)}")
        else:
            st.sidebar.caption(info.error or "No dividends")
        if info.current_price:
            st.sidebar.caption(f"Last close: {info.current_price:,.2f}")

        shares = st.sidebar.number_input("Number of shares", min_value=1, value=10, step=1)
        currencies = list(EXCHANGE_RATES_TO_USD)
        currency = st.sidebar.selectbox(
            "Currency", options=currencies, index=currencies.index(REPORTING_CURRENCY)
        )
        if st.sidebar.button("Add to portfolio"):
            manual.append(Holding(picked.ticker, picked.name, float(shares), currency))

    if st.sidebar.button("🎲 Try an example portfolio"):
        manual.extend(random_example_holdings(5, 10, exclude=[h.ticker for h in manual]))

    if manual:
        st.sidebar.dataframe(
            pd.DataFrame(
                [{"Ticker": h.ticker, "Shares": h.shares, "Currency": h.currency} for h in manual]
            ).set_index("Ticker")
        )
        if st.sidebar.button("Clear added stocks"):
            manual.clear()

    return manual


def main() -> None:
    settings = Settings.load()

    force_dark_toggle = st.sidebar.toggle(
        "Force white chart labels",
        value=False,
        help="Use when pie labels are unreadable in dark mode.",
    )

    service = _data_service(settings.cache_ttl_seconds, settings.fetch_workers)

    # ------------------ Inputs ------------------ #
    manual = _portfolio_builder(service)

    uploaded = st.file_uploader("Avanza portfolio export (.csv)", type=["csv"])
    holdings = list(manual)
    if uploaded is not None:
        parsed = HoldingsRepository().parse(uploaded.getvalue().decode("utf-8-sig"))
        _display_messages(parsed.messages, stop_on_error=not (parsed.holdings or manual))
        holdings = parsed.holdings + holdings

    if not holdings:
        st.info(
            "Upload a CSV export or add stocks from the sidebar to project your dividend income."
        )
        st.stop()

    with st.spinner("Fetching dividend history..."):
        batch = service.fetch_batch(holdings)
    _display_messages(batch.messages)

    stocks = batch.stocks
    if not stocks:
        st.error("None of the tickers could be resolved.")
        st.stop()

    _display_messages(CurrencyNormalizer().unknown_currencies(s.currency for s in stocks))

    scenarios = settings.scenarios
    results = project_scenarios(stocks, scenarios)
    labels = {scenario.name: scenario.label for scenario in scenarios}

    scenario_name = st.radio(
        "Price scenario",
        options=list(labels),
        format_func=labels.get,
        horizontal=True,
    )
    result = results[scenario_name]
    years = sorted(result)

    # ------------------ Summary ------------------ #
    value = calculate_portfolio_value(stocks)
    final_shares = result[years[-1]].end_of_year_shares
    final_value = calculate_year_end_value(stocks, final_shares)

    st.subheader("📈 Portfolio Summary")
    col1, col2, col3 = st.columns(3)
    col1.metric("Current value (USD)", f"${value.total_usd:,.2f}")
    col2.metric(
        f"Income {years[0]} (USD)",
        f"${result[years[0]].year_total_by_currency.get(REPORTING_CURRENCY, 0.0):,.2f}",
    )
    growth = (final_value / value.total_usd - 1) * 100 if value.total_usd else 0.0
    col3.metric(f"Value end of {years[-1]}", f"${final_value:,.2f}", f"{growth:.2f}%")

    # ------------------ Monthly income per year ------------------ #
    monthly = monthly_totals_frame(result)
    payments = payments_frame(result)
    tabs = st.tabs([str(year) for year in years])
    for tab, year in zip(tabs, years):
        with tab:
            df_year = monthly[monthly["Year"] == year].copy()
            df_year["Month"] = df_year["Month"].map(lambda m: MONTH_LABELS[m - 1])
            fig = px.bar(df_year, x="Month", y="Total (USD)", title=f"Dividend income {year}")
            fig.update_layout(xaxis_title="", yaxis_title=REPORTING_CURRENCY)
            st.plotly_chart(fig, use_container_width=True)

            df_pay = payments[payments["Year"] == year].drop(columns=["Year"])
            if df_pay.empty:
                st.info("No dividend payments projected for this year.")
            else:
                st.dataframe(
                    df_pay.set_index("Date").style.format(
                        {"Amount (USD)": "{:,.2f}", "Shares": "{:,.0f}"}
                    )
                )

    st.download_button(
        "Download payments (.csv)",
        data=payments.to_csv(index=False).encode("utf-8"),
        file_name=f"dividend_payments_{scenario_name}.csv",
        mime="text/csv",
    )

    # ------------------ Share growth ------------------ #
    show_details = st.toggle("🔎 Show reinvestment details")
    if show_details:
        df_shares = shares_frame(result)
        fig_shares = go.Figure()
        for ticker, group in df_shares.groupby("Ticker", sort=False):
            fig_shares.add_trace(
                go.Scatter(x=group["Year"], y=group["Shares"], mode="lines+markers", name=ticker)
            )
        fig_shares.update_layout(
            title="Shares held at year end", xaxis_title="Year", yaxis_title="Shares"
        )
        st.plotly_chart(fig_shares, use_container_width=True)

        df_frequency = pd.DataFrame(
            [
                {
                    "Ticker": stock.ticker,
                    "Name": clean_stock_name(stock.name),
                    "Frequency": batch.frequencies[stock.ticker].frequency,
                    "Months": format_frequency(batch.frequencies[stock.ticker]),
                }
                for stock in stocks
                if stock.ticker in batch.frequencies
            ]
        )
        st.dataframe(df_frequency.set_index("Ticker"))

    # ------------------ Suggestions ------------------ #
    analysis = analyze_low_months(result)
    suggestions = suggest_stocks(analysis.low_months, [s.ticker for s in stocks])
    if suggestions:
        st.subheader("🧩 Fill your low months")
        st.caption(
            "Months below the average of "
            f"${analysis.average:,.2f}: "
            + ", ".join(MONTH_LABELS[m - 1] for m in analysis.low_months)
        )
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "Ticker": s.ticker,
                        "Name": s.name,
                        "Sector": s.sector,
                        "Covers": ", ".join(MONTH_LABELS[m - 1] for m in s.covered_months),
                    }
                    for s in suggestions
                ]
            ).set_index("Ticker")
        )

    # ------------------ Pie: current value ------------------ #
    if value.total_usd <= 0:
        return

    is_dark = _theme_is_dark(force=True if force_dark_toggle else None)
    txt_col = "white" if is_dark else "black"

    plt.rcParams["savefig.transparent"] = True
    fig_pie, ax = plt.subplots(facecolor="none")
    ax.set_facecolor("none")
    _, texts, autotexts = ax.pie(
        [s.value_usd for s in value.stocks],
        labels=[clean_stock_name(s.name) for s in value.stocks],
        autopct="%1.1f%%",
        startangle=90,
        counterclock=False,
        wedgeprops={"edgecolor": txt_col, "linewidth": 1.0},
    )
    for t in [*texts, *autotexts]:
        t.set_color(txt_col)
        t.set_fontsize(11)
    ax.axis("equal")

    st.subheader("🍰 Current Portfolio Value")
    st.pyplot(fig_pie, transparent=True)


if __name__ == "__main__":
    main()

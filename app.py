import logging

import streamlit as st
import numpy as np
import plotly.graph_objects as go
from membership import build_membership
from fan_controller import (
    LinguisticSet, TEMPERATURE_SETS, OCCUPANCY_SETS, OUTPUT_SETS, OUTPUT_UNIVERSE,
    temperature_membership, occupancy_membership, evaluate_rules, aggregate, defuzzify,
    evaluate, sample_surface,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="SR Temperature Controller", layout="wide", page_icon="🌀")

# ---- slider config: (min, max, default, step) ----
TEMP_SLIDER = (10.0, 40.0, 24.0, 0.5)
OCC_SLIDER = (0, 20, 5, 1)

SET_COLORS = {LinguisticSet.LOW: "#38bdf8", LinguisticSet.MEDIUM: "#facc15", LinguisticSet.HIGH: "#f87171"}

# ---------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------
@st.cache_data
def load_surface():
    """The control surface has no inputs; sample it once per server process."""
    return sample_surface()

def plot_sets(title, U, sets, x_now=None, extra=None, x_title="Universe"):
    fig = go.Figure()
    for s, (mtype, params) in sets.items():
        fig.add_trace(go.Scatter(x=U, y=build_membership(U, mtype, params), mode="lines",
                                 name=s.label, line=dict(color=SET_COLORS[s]), opacity=0.6))
    if extra is not None:
        label, mu = extra
        fig.add_trace(go.Scatter(x=U, y=mu, mode="lines", name=label, fill="tozeroy",
                                 line=dict(width=3, color="#22d3ee")))
    if x_now is not None:
        fig.add_vline(x=x_now, line=dict(color="red", dash="dash"))
    fig.update_layout(template="plotly_dark", title=title, height=280,
                      xaxis_title=x_title, yaxis_title="Membership", margin=dict(t=40, b=30))
    st.plotly_chart(fig, use_container_width=True)

def plot_gauge(value, label="Power"):
    fig = go.Figure(go.Indicator(
        mode="gauge+number", value=value,
        number={"suffix": "%", "valueformat": ".1f"},
        title={"text": label},
        gauge={
            "axis": {"range": [0, 100]},
            "bar": {"color": "#22d3ee"},
            "steps": [
                {"range": [0, 35], "color": "#1e293b"},
                {"range": [35, 65], "color": "#334155"},
                {"range": [65, 100], "color": "#475569"},
            ],
        },
    ))
    fig.update_layout(template="plotly_dark", height=280, margin=dict(t=40, b=10))
    st.plotly_chart(fig, use_container_width=True)

def plot_surface(grid, temperature, occupancy, speed):
    fig = go.Figure([
        go.Surface(
            z=grid.speed_matrix, x=grid.temperature_axis, y=grid.occupancy_axis,
            colorscale="Viridis", showscale=False, opacity=0.9,
            contours={"z": {"show": True, "usecolormap": True, "highlightcolor": "#42f542", "project": {"z": True}}},
        ),
        go.Scatter3d(
            x=[temperature], y=[occupancy], z=[speed], mode="markers", name="Current State",
            marker=dict(color="red", size=8, line=dict(color="white", width=2)),
        ),
    ])
    fig.update_layout(
        template="plotly_dark", title="Fuzzy Control Surface", height=560, showlegend=False,
        margin=dict(l=0, r=0, b=0, t=40),
        scene=dict(xaxis_title="Temp (°C)", yaxis_title="Occupancy", zaxis_title="Fan Speed (%)",
                   camera=dict(eye=dict(x=1.5, y=1.5, z=1.5))),
    )
    st.plotly_chart(fig, use_container_width=True)

def show_rules(active_rules):
    st.markdown("### Active Rules")
    if not active_rules:
        st.info("No significant rules firing.")
    for r in active_rules:
        c1, c2 = st.columns([4, 1])
        c1.write(f"**{r.name}** → Fan {r.output_set.label}")
        c1.progress(min(1.0, r.firing_strength))
        c2.write(f"`{r.firing_strength:.2f}`")

# ---- header ----
st.markdown("<h1 style='margin:0'>🌀 SR Temperature Controller</h1>", unsafe_allow_html=True)
st.caption("Adjust inputs to see how the fuzzy engine determines optimal fan speed.")
st.write("---")

left, right = st.columns([4, 8])

# =========================================================
# Controls, gauge and rules
# =========================================================
with left:
    t_min, t_max, t_def, t_step = TEMP_SLIDER
    temperature = st.slider("Temperature (°C)", t_min, t_max, t_def, step=t_step, key="temperature")
    o_min, o_max, o_def, o_step = OCC_SLIDER
    occupancy = st.slider("Occupancy (people)", o_min, o_max, o_def, step=o_step, key="occupancy")

    result = evaluate(temperature, occupancy)

    st.markdown("### Calculated Output")
    plot_gauge(result.speed)
    st.metric("Fan speed", f"{result.speed:.1f} %")
    st.caption("Defuzzification Method: **Centroid (Center of Gravity)**")

    show_rules(result.active_rules)

# =========================================================
# Surface and membership functions
# =========================================================
with right:
    st.markdown("### Control Surface Topology")
    st.caption("Shows Fan Speed (Z) for all Temp (X) & Occupancy (Y)")
    plot_surface(load_surface(), temperature, occupancy, result.speed)

    with st.expander("Membership functions", expanded=False):
        temp_degree = temperature_membership(temperature)
        occ_degree = occupancy_membership(occupancy)
        U, mu = aggregate(evaluate_rules(temp_degree, occ_degree))

        plot_sets("Temperature", np.linspace(0, 50, 201), TEMPERATURE_SETS, x_now=temperature, x_title="°C")
        plot_sets("Occupancy", np.linspace(0, 25, 101), OCCUPANCY_SETS, x_now=occupancy, x_title="people")
        plot_sets("Fan speed", OUTPUT_UNIVERSE, OUTPUT_SETS, x_now=defuzzify(U, mu),
                  extra=("Aggregated", mu), x_title="%")
        st.dataframe({
            "Set": [s.label for s in LinguisticSet],
            "μ temperature": np.round(temp_degree, 4),
            "μ occupancy": np.round(occ_degree, 4),
        }, use_container_width=True)

    c1, c2, c3 = st.columns(3)
    c1.markdown("**Temperature Input**  \nMapped to 3 fuzzy sets: Cold, Comfortable, Hot. "
                "Uses trapezoidal edges and triangular center.")
    c2.markdown("**Occupancy Input**  \nImpacts cooling load. High occupancy triggers higher fan "
                "speeds even at moderate temperatures.")
    c3.markdown("**Smooth Transitions**  \nFuzzy logic prevents abrupt switching between speeds, "
                "providing analog-like control from discrete rules.")

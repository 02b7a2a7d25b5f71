import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from config import RESULT_CLASSES

CLASS_COLORS = {"single": "#06b6d4", "twin": "#f97316", "twin_plus": "#f43f5e"}


class BBFSVisualizer:
    def plot_summary(self, summary: pd.DataFrame):
        long = summary.melt(id_vars="type", value_vars=list(RESULT_CLASSES), var_name="class", value_name="count")
        fig = px.bar(long, x="type", y="count", color="class", barmode="stack",
                     color_discrete_map=CLASS_COLORS, title="Generated numbers per dimension")
        return fig

    def plot_costs(self, costs: pd.DataFrame):
        by_tier = costs.groupby(["type", "tier"], as_index=False)["cost"].sum()
        fig = px.bar(by_tier, x="type", y="cost", color="tier", barmode="group", title="Estimated cost per tier")
        return fig

    def plot_position_matrix(self, matrix: np.ndarray):
        labels = [f"P{i + 1}" for i in range(matrix.shape[0])]
        fig = go.Figure(go.Heatmap(z=matrix, x=[str(d) for d in range(10)], y=labels, colorscale="Viridis"))
        fig.update_layout(title="Digit frequency by position", xaxis_title="Digit", yaxis_title="Position")
        return fig

    def plot_top_rank_status(self, status: pd.DataFrame):
        counts = status["is_out"].map({True: "out", False: "waiting"}).value_counts()
        fig = go.Figure([go.Bar(x=list(counts.index), y=list(counts.values))])
        fig.update_layout(title="Top ranking sets drawn since threshold")
        return fig

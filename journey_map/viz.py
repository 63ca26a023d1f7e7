from typing import Iterable

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .models import Journey


def score_histogram(journeys: Iterable[Journey], threshold: float) -> go.Figure | None:
    """Distribution of anomaly scores with the threshold marked."""
    scores = [j.score for j in journeys if j.score is not None]

    if not scores:
        return None

    df = pd.DataFrame({"Score": scores})
    df["Flagged"] = df["Score"] > threshold

    fig = px.histogram(
        df,
        x="Score",
        color="Flagged",
        nbins=50,
        color_discrete_map={True: "#ff4444", False: "#00ff88"},
        title="Anomaly Score Distribution",
    )
    fig.add_vline(
        x=threshold,
        line_dash="dash",
        line_color="white",
        annotation_text=f"threshold {threshold}",
    )
    fig.update_layout(
        height=350,
        bargap=0.05,
    )

    return fig

import plotly.graph_objects as go

from .const import (
    FATIGUED,
    NEVER_TRAINED_HOURS,
    READY,
    READY_THRESHOLD,
    RECOVERING,
    RECOVERING_THRESHOLD,
    STATUS_COLORS,
)


class RecoveryVisualizer:
    def __init__(self, report=None):
        self.report = report

    def create_recovery_chart(self):
        """
        Horizontal bar per tracked muscle, colored by recovery status.
        Most fatigued muscles end up at the top.
        """
        if self.report is None:
            return None

        plot_data = self.report.to_frame()
        if plot_data.empty:
            return None

        plot_data = plot_data.sort_values('recovery_percentage', ascending=False, kind='stable')
        hours_label = plot_data['hours_since'].apply(
            lambda h: 'never trained' if h >= NEVER_TRAINED_HOURS else f"{h:.0f} h ago"
        )

        fig = go.Figure(go.Bar(
            x=plot_data['recovery_percentage'],
            y=plot_data['muscle'],
            orientation='h',
            marker=dict(color=plot_data['color']),
            text=plot_data['recovery_percentage'].astype(str) + '%',
            textposition='inside',
            customdata=list(zip(plot_data['status'], hours_label)),
            hovertemplate='<b>%{y}</b><br>%{x}% recovered<br>%{customdata[0]} (%{customdata[1]})<extra></extra>'
        ))

        # Status thresholds
        for threshold in (RECOVERING_THRESHOLD, READY_THRESHOLD):
            fig.add_vline(x=threshold, line=dict(color='rgba(255,255,255,0.3)', dash='dot'))

        fig.update_layout(
            title='Muscle Recovery',
            height=450,
            xaxis=dict(title='Recovery (%)', range=[0, 100]),
            yaxis=dict(title=None),
            margin=dict(l=40, r=40, t=50, b=40),
            showlegend=False
        )
        return fig

    def create_readiness_gauge(self):
        if self.report is None:
            return None

        fig = go.Figure(go.Indicator(
            mode='gauge+number',
            value=self.report.global_readiness,
            number=dict(suffix='%'),
            title=dict(text='Readiness'),
            gauge=dict(
                axis=dict(range=[0, 100]),
                bar=dict(color='white'),
                steps=[
                    dict(range=[0, RECOVERING_THRESHOLD], color=STATUS_COLORS[FATIGUED]),
                    dict(range=[RECOVERING_THRESHOLD, READY_THRESHOLD], color=STATUS_COLORS[RECOVERING]),
                    dict(range=[READY_THRESHOLD, 100], color=STATUS_COLORS[READY]),
                ]
            )
        ))
        fig.update_layout(height=280, margin=dict(l=30, r=30, t=60, b=20))
        return fig

    def create_exercise_progression_chart(self, stats, exercise_name):
        """
        Creates a strength progression chart for one exercise.
        Plots:
        1. Scatter points: estimated 1RM of every session.
        2. Line: the running record (step function).
        """
        if stats is None or stats.progression.empty:
            return None

        progression = stats.progression
        fig = go.Figure()

        fig.add_trace(go.Scatter(
            x=progression['date'],
            y=progression['estimated_1rm'],
            mode='markers',
            name='Session e1RM',
            marker=dict(color='#BDADEA', size=8, opacity=0.6),
            hovertemplate='e1RM: %{y:.0f} kg<extra></extra>'
        ))

        fig.add_trace(go.Scatter(
            x=progression['date'],
            y=progression['record_1rm'],
            mode='lines',
            name='e1RM Record',
            line=dict(color='#ef476f', width=2, shape='hv'),  # hv shape makes it a step function
            hoverinfo='skip'
        ))

        fig.update_layout(
            title=f"Strength Progression (1RM): {exercise_name}",
            xaxis_title=None,
            xaxis=dict(hoverformat='%d %b %Y'),
            yaxis_title='Estimated 1RM (kg)',
            hovermode='x unified',
            showlegend=True,
            legend=dict(orientation="h", y=1.1, x=1, xanchor="right")
        )
        return fig

    def create_target_map_chart(self, target_map):
        """Tile per muscle worked by an exercise, primary first."""
        if not target_map:
            return None

        muscles = list(target_map.values())
        fig = go.Figure(go.Bar(
            x=[m.name for m in muscles],
            y=[1] * len(muscles),
            marker=dict(color=[m.color for m in muscles]),
            text=['Primary' if m.status == FATIGUED else 'Secondary' for m in muscles],
            textposition='inside',
            hoverinfo='x+text'
        ))
        fig.update_layout(
            title='Muscles Worked',
            height=200,
            yaxis=dict(visible=False),
            xaxis=dict(title=None),
            margin=dict(l=20, r=20, t=40, b=20),
            showlegend=False
        )
        return fig

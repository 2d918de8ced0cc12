# radial_app.py
# Regional Strengths dashboard: one region against the average of the rest.

import argparse
import logging
import sys

from dash import Dash, dcc, html, Input, Output

import chart_settings as CS
from radial_core import compute_view
from radial_figure import build_figure, empty_figure, format_percent, summary_subtext
from region_data import DataLoadError, load_country_records

APP_TITLE = "Regional Strengths"

logger = logging.getLogger(__name__)


def build_app(countries, region_list=CS.REGION_LIST, metrics=CS.METRICS,
              default_region=CS.DEFAULT_REGION):
    """Dash app over already-loaded country records. Nothing is cached between selections."""
    region_list = list(region_list)
    app = Dash(__name__, title=APP_TITLE)

    app.layout = html.Div(
        style={"fontFamily": "system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial",
               "padding": "16px", "maxWidth": "1200px", "margin": "0 auto"},
        children=[
            html.H2(APP_TITLE, style={"marginBottom": "8px"}),
            html.P([
                "How the selected region compares with the average of the other regions across ",
                html.Span(str(len(metrics)), id="metric-count"),
                " metrics. Purple marks the metrics where it does at least as well.",
            ]),

            html.Div([
                html.Label("Region"),
                dcc.Dropdown(
                    id="region-select",
                    options=[{"label": r, "value": r} for r in region_list],
                    value=default_region,
                    clearable=False,
                ),
            ], style={"maxWidth": "360px", "margin": "12px 0 20px 0"}),

            html.Div(id="summary", style={"fontSize": "15px", "color": "#333"}),

            dcc.Graph(
                id="radial-chart",
                config={"displaylogo": False},
                style={"height": f"{CS.CHART_HEIGHT}px"},
            ),
        ],
    )

    @app.callback(
        Output("radial-chart", "figure"),
        Output("summary", "children"),
        Input("region-select", "value"),
    )
    def update(region):
        try:
            view = compute_view(countries, region_list, metrics, region)
        except ValueError as e:
            logger.warning("Cannot draw region %r: %s", region, e)
            return empty_figure(str(e)), ""
        summary = view["summary"]
        text = f"{format_percent(summary['percent'])} {summary_subtext(region)}"
        return build_figure(view, region_list), text

    return app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=APP_TITLE)
    parser.add_argument("--data", default=CS.DATA_FILE, help="indicator table (CSV)")
    parser.add_argument("--regions", default=CS.REGIONS_FILE, help="ISO code -> region table (CSV)")
    parser.add_argument("--region", default=CS.DEFAULT_REGION, choices=CS.REGION_LIST,
                        help="region selected when the page opens")
    parser.add_argument("--debug", action="store_true", help="run Dash in debug mode")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        countries = load_country_records(args.data, args.regions)
    except DataLoadError as e:
        logger.error("Error loading data: %s", e)
        return 1

    print(f"Country rows: {len(countries):,}, regions: {len(CS.REGION_LIST)}, "
          f"metrics: {len(CS.METRICS)}")
    app = build_app(countries, default_region=args.region)
    app.run(debug=args.debug, dev_tools_hot_reload=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Adapters from `ChartModel` to concrete chart libraries.

Colors are defined once per sex here and shared by every renderer.
"""

COLOR_PALETTE = {
    "male": "rgba(54, 162, 235, 0.5)",
    "female": "rgba(255, 99, 132, 0.5)",
}

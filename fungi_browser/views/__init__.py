from .word_cloud_view import WordCloudView
from .bar_chart_view import BarChartView

__all__ = ["WordCloudView", "BarChartView"]

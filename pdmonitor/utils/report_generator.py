import logging
from typing import Optional, Sequence

from pdmonitor.calculators.moving_average import apply_moving_averages, compute_trend_metrics
from pdmonitor.calculators.station_tally import tally_chart_slices, tally_devices
from pdmonitor.config import NarrativeThresholds
from pdmonitor.engines.diagnostics import (
    channel_assessment,
    crossover_narrative,
    diagnosis_text,
    trend_narrative,
)
from pdmonitor.models.device import Channel, Device
from pdmonitor.models.severity import severity_display
from pdmonitor.signal.synthesizer import history_from_values, synthesize_series

logger = logging.getLogger(__name__)


def _resolve_history(device: Device, history, synthesize: bool, channel: Optional[Channel] = None):
    """
    Ingested history when given, synthesized fallback only on explicit request.
    Devices without data never get a synthesized history.
    """
    if history is not None:
        return apply_moving_averages(history_from_values(history))
    if synthesize and device.has_data:
        return apply_moving_averages(synthesize_series(device.status, channel=channel))
    return None


def generate_device_report(
    device: Device,
    population: Sequence[Device],
    history: Optional[Sequence[float]] = None,
    synthesize: bool = False,
    thresholds: Optional[NarrativeThresholds] = None,
) -> dict:
    """
    Builds the per-device diagnosis report payload.

    Args:
        device (Device): The device being reported on.
        population (Sequence[Device]): Devices of the station, for the summary tally.
        history (Sequence[float], optional): Daily amplitude history, oldest first.
        synthesize (bool): Fall back to a synthesized 90-day history when no
            history is supplied. Off by default so missing data stays visible.
        thresholds (NarrativeThresholds, optional): Trend narrative policy.

    Returns:
        dict: JSON-ready report. "history", "trendMetrics" and "trendNarrative"
        are None when no history is available.
    """
    display = severity_display(device.status)
    tally = tally_devices(population)

    points = _resolve_history(device, history, synthesize)
    synthesized = history is None and points is not None

    history_rows = None
    metrics_out = None
    narrative = None
    if points is not None:
        metrics = compute_trend_metrics(points)
        history_rows = [p.to_dict() for p in points]
        metrics_out = {f"d{window}": metric.to_dict() for window, metric in metrics.items()}
        narrative = trend_narrative(metrics[30].growth, metrics[90].growth, thresholds)
    else:
        logger.info("No history for device %s, trend sections left empty", device.id)

    return {
        "device": {
            "id": device.id,
            "name": device.name,
            "station": device.station,
            "projectId": device.project_id,
            "lastUpdated": device.last_updated_date,
            "image": device.image,
        },
        "status": {
            "level": device.status.name,
            "label": display.label,
            "description": display.description,
            "color": display.color,
        },
        "channels": channel_assessment(device),
        "stationStats": {
            "counts": tally.to_dict(),
            "chart": [
                {"name": label, "value": count, "color": color}
                for label, count, color in tally_chart_slices(tally)
            ],
        },
        "history": history_rows,
        "synthesized": synthesized,
        "trendMetrics": metrics_out,
        "trendNarrative": narrative,
        "diagnosis": diagnosis_text(device.status),
    }


def generate_channel_analysis(
    device: Device,
    channel: Channel,
    history: Optional[Sequence[float]] = None,
    synthesize: bool = False,
) -> Optional[dict]:
    """
    Moving-average analysis of one channel: points with MA7/MA30/MA90 and the
    crossover note. Returns None when no history is available.
    """
    points = _resolve_history(device, history, synthesize, channel=channel)
    if points is None:
        return None
    return {
        "deviceId": device.id,
        "channel": channel.value,
        "points": [p.to_dict() for p in points],
        "synthesized": history is None,
        "narrative": crossover_narrative(points, channel),
    }

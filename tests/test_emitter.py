"""Tests for gauge and event emission."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from datadog.dogstatsd import DogStatsd

from ecsdog.metrics.emitter import MAX_EVENT_FIELD_LENGTH, MetricEmitter, create_statsd_client


class TestMetricEmitter:
    def test_gauge_is_namespaced_and_cluster_tagged(self, emitter, statsd):
        emitter.gauge("service.running", 3, ["service_name:web"])

        statsd.gauge.assert_called_once_with(
            "aws.ecs.service.running",
            3.0,
            tags=["service_name:web", "cluster_name:production"],
            sample_rate=1,
        )

    def test_sample_rate_is_passed_through(self, emitter, statsd):
        emitter.gauge("services", 7, [], sample_rate=0.25)
        assert statsd.gauge.call_args.kwargs["sample_rate"] == 0.25

    def test_caller_tags_are_not_mutated_or_shared(self, emitter, statsd):
        tags = ["service_name:web"]

        emitter.gauge("service.desired", 1, tags)
        emitter.gauge("service.pending", 0, tags)

        assert tags == ["service_name:web"]
        first, second = (c.kwargs["tags"] for c in statsd.gauge.call_args_list)
        assert first == second
        assert first is not second

    def test_custom_namespace(self, statsd):
        MetricEmitter(statsd, "staging", namespace="ecs").gauge("services", 2, [])
        assert statsd.gauge.call_args.args[0] == "ecs.services"

    def test_event(self, emitter, statsd):
        created = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

        emitter.event(
            title="(service web) has reached a steady state.",
            text="(service web) has reached a steady state.",
            timestamp=created,
            aggregation_key="web",
            tags=["service_name:web", "ecs"],
        )

        statsd.event.assert_called_once_with(
            "(service web) has reached a steady state.",
            "(service web) has reached a steady state.",
            aggregation_key="web",
            date_happened=int(created.timestamp()),
            tags=["service_name:web", "ecs", "cluster_name:production"],
        )

    def test_long_event_message_is_truncated(self, emitter, statsd):
        message = "x" * 5000

        emitter.event(
            title=message,
            text=message,
            timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc),
            aggregation_key="web",
            tags=[],
        )

        title, text = statsd.event.call_args.args
        assert len(title) == MAX_EVENT_FIELD_LENGTH
        assert text == title
        assert title.endswith("...")
        assert title.startswith("x" * (MAX_EVENT_FIELD_LENGTH - 3))

    def test_long_event_fits_real_client(self):
        statsd = DogStatsd(host="127.0.0.1", port=8125, disable_buffering=True)
        emitter = MetricEmitter(statsd, "production")
        message = "x" * 5000

        try:
            # would raise ValueError for payloads of 8KB or more
            emitter.event(message, message, datetime(2024, 5, 1, tzinfo=timezone.utc), "web", ["service_name:web", "ecs"])
        finally:
            emitter.close()

    def test_sink_errors_propagate(self, emitter, statsd):
        statsd.gauge.side_effect = OSError("socket closed")
        with pytest.raises(OSError):
            emitter.gauge("services", 1, [])

    def test_close_releases_socket(self, emitter, statsd):
        emitter.close()
        statsd.close_socket.assert_called_once_with()


class TestCreateStatsdClient:
    @patch("ecsdog.metrics.emitter.DogStatsd")
    def test_host_and_port(self, mock_dogstatsd):
        create_statsd_client("10.0.0.5:9125")
        mock_dogstatsd.assert_called_once_with(host="10.0.0.5", port=9125, disable_buffering=True)

    @patch("ecsdog.metrics.emitter.DogStatsd")
    def test_default_port(self, mock_dogstatsd):
        create_statsd_client("localhost")
        mock_dogstatsd.assert_called_once_with(host="localhost", port=8125, disable_buffering=True)

    @patch("ecsdog.metrics.emitter.DogStatsd")
    def test_unix_socket(self, mock_dogstatsd):
        create_statsd_client("unix:///var/run/datadog/dsd.socket")
        mock_dogstatsd.assert_called_once_with(
            socket_path="/var/run/datadog/dsd.socket", disable_buffering=True
        )

    @pytest.mark.parametrize("address", [":8125", "localhost:statsd", "unix://", ""])
    def test_invalid_address(self, address):
        with pytest.raises(ValueError):
            create_statsd_client(address)

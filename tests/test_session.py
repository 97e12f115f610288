#!/usr/bin/env python3
"""
test_session.py - 컨트롤러 세션/레지스트리 테스트

Author: FurSys AI Team
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parents[1]))

import logging

import numpy as np
import pytest

from padmotion.config import SystemConfig
from padmotion.geometry import Vector3, Quaternion
from padmotion.fusion import MotionSession, MotionSessionRegistry

AT_REST = Vector3(0.0, -1.0, 0.0)


class TestMotionSession:
    """MotionSession 테스트"""

    def test_tracker_built_from_config(self):
        config = SystemConfig()
        config.fusion.accel_correction = 0.2
        config.bias.max_samples = 30
        session = MotionSession("pad-0", config)

        assert session.tracker.accel_correction == 0.2
        assert session.tracker.max_samples == 30

    def test_first_timestamp_has_zero_delta(self):
        session = MotionSession("pad-0")
        state = session.process(AT_REST, Vector3(0, 90.0, 0), timestamp=5.0)

        assert state.delta_time == 0.0
        assert state.timestamp == 5.0
        assert state.total_rotation == Quaternion.identity()

    def test_timestamp_delta(self):
        session = MotionSession("pad-0")
        session.process(AT_REST, Vector3(), timestamp=1.0)
        state = session.process(AT_REST, Vector3(), timestamp=1.02)

        assert state.delta_time == pytest.approx(0.02)

    def test_non_monotonic_timestamp_warns(self, caplog):
        session = MotionSession("pad-0")
        session.process(AT_REST, Vector3(), timestamp=2.0)

        with caplog.at_level(logging.WARNING):
            state = session.process(AT_REST, Vector3(0, 90.0, 0), timestamp=1.5)

        assert state.delta_time == 0.0
        assert "Non-monotonic" in caplog.text

    def test_explicit_delta_time(self):
        session = MotionSession("pad-0")
        state = session.process(AT_REST, Vector3(), delta_time=0.1)
        assert state.delta_time == 0.1
        assert state.timestamp is None

    def test_delta_time_with_timestamp(self):
        session = MotionSession("pad-0")
        session.process(AT_REST, Vector3(), timestamp=3.0, delta_time=0.5)
        state = session.process(AT_REST, Vector3(), timestamp=3.25)
        assert state.delta_time == pytest.approx(0.25)

    def test_delta_time_advances_timestamp(self):
        """delta_time 만 주어지면 직전 타임스탬프를 전진"""
        session = MotionSession("pad-0")
        session.process(AT_REST, Vector3(), timestamp=5.0)

        state = session.process(AT_REST, Vector3(), delta_time=0.01)
        assert state.timestamp == pytest.approx(5.01)

        state = session.process(AT_REST, Vector3(), timestamp=5.03)
        assert state.delta_time == pytest.approx(0.02)

    def test_missing_time_raises(self):
        session = MotionSession("pad-0")
        with pytest.raises(ValueError):
            session.process(AT_REST, Vector3())

    def test_bias_disabled_uses_plain_update(self):
        config = SystemConfig()
        config.bias.enabled = False
        session = MotionSession("pad-0", config)

        for i in range(10):
            session.process(AT_REST, Vector3(0.3, 0, 0), delta_time=0.01)

        assert session.tracker.gyro_bias.count == 0
        assert session.tracker.total_rotation.angle_to(Quaternion.identity()) > 0.02

    def test_bias_enabled_collects_samples(self):
        session = MotionSession("pad-0")
        for _ in range(10):
            state = session.process(AT_REST, Vector3(), delta_time=0.01)

        assert state.gyro_bias_samples == 10
        assert state.accel_bias_samples == 10

    def test_smoothing(self):
        config = SystemConfig()
        config.smoothing.enabled = True
        config.smoothing.strength = 0.5
        config.bias.enabled = False
        session = MotionSession("pad-0", config)

        session.process(Vector3(0.0, -1.0, 2.0), Vector3(), delta_time=0.01)

        expected = session.tracker.filtered_accel * 0.5
        np.testing.assert_allclose(session.smoothed_accel.to_array(), expected.to_array())

    def test_smoothing_disabled_passes_through(self):
        session = MotionSession("pad-0")
        session.process(Vector3(0.0, -1.0, 2.0), Vector3(), delta_time=0.01)
        assert session.smoothed_accel == session.tracker.filtered_accel

    def test_tick_count_and_state(self):
        session = MotionSession("pad-0")
        for i in range(3):
            session.process(AT_REST, Vector3(), timestamp=i * 0.01)

        assert session.tick_count == 3
        assert session.state.timestamp == pytest.approx(0.02)


class TestMotionSessionRegistry:
    """MotionSessionRegistry 테스트"""

    def test_connect_is_idempotent(self):
        registry = MotionSessionRegistry()
        a = registry.connect("pad-0")
        b = registry.connect("pad-0")

        assert a is b
        assert len(registry) == 1
        assert "pad-0" in registry

    def test_lazy_creation_on_first_sample(self):
        registry = MotionSessionRegistry()
        assert registry.get("pad-1") is None

        registry.process("pad-1", AT_REST, Vector3(), timestamp=0.0)

        assert "pad-1" in registry
        assert registry.get("pad-1").tick_count == 1

    def test_controllers_are_independent(self):
        registry = MotionSessionRegistry()
        for i in range(50):
            t = i * 0.01
            gyro = Vector3(0, 0, 90.0 + 5.0 * (i % 2))
            registry.process("spinning", AT_REST, gyro, timestamp=t)
            registry.process("still", AT_REST, Vector3(), timestamp=t)

        spinning = registry.get("spinning").state
        still = registry.get("still").state

        assert still.total_rotation.angle_to(Quaternion.identity()) < 1e-6
        assert spinning.total_rotation.angle_to(Quaternion.identity()) > 10.0

    def test_disconnect_discards_state(self):
        registry = MotionSessionRegistry()
        registry.process("pad-0", AT_REST, Vector3(0, 0, 90.0), delta_time=0.5)

        assert registry.disconnect("pad-0") is True
        assert "pad-0" not in registry

        state = registry.process("pad-0", AT_REST, Vector3(), delta_time=0.01)
        assert state.total_rotation == Quaternion.identity()

    def test_disconnect_unknown(self, caplog):
        registry = MotionSessionRegistry()
        with caplog.at_level(logging.WARNING):
            assert registry.disconnect("ghost") is False
        assert "unknown controller" in caplog.text

    def test_iteration(self):
        registry = MotionSessionRegistry()
        for cid in ("a", "b", "c"):
            registry.connect(cid)

        for cid in registry:
            registry.disconnect(cid)

        assert len(registry) == 0

    def test_shared_config(self):
        config = SystemConfig()
        config.fusion.accel_correction = 0.3
        registry = MotionSessionRegistry(config)

        assert registry.connect(1).tracker.accel_correction == 0.3
        assert registry.connect(2).tracker.accel_correction == 0.3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

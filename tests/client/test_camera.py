"""Tests for frame encoding and the auto analysis loop."""

import base64
from unittest.mock import AsyncMock

import numpy as np
import pytest

from coach_ai.client.camera import AutoAnalyzer, Camera, CameraError, encode_frame
from coach_ai.exceptions import FunctionCallError
from coach_ai.models.form_analysis import fallback_analysis


def black_frame():
    return np.zeros((48, 64, 3), dtype=np.uint8)


def test_encode_frame_produces_jpeg():
    decoded = base64.b64decode(encode_frame(black_frame()))
    assert decoded[:2] == b"\xff\xd8"
    assert decoded[-2:] == b"\xff\xd9"


def test_read_requires_open_camera():
    with pytest.raises(CameraError):
        Camera(0).read()


class TestAutoAnalyzer:

    async def test_analyzes_until_stopped(self):
        results = []
        analyze = AsyncMock(return_value=fallback_analysis())

        def on_result(analysis):
            results.append(analysis)
            if len(results) == 2:
                analyzer.stop()

        analyzer = AutoAnalyzer(black_frame, analyze, on_result, interval=0.01)
        await analyzer.run()

        assert analyzer.runs == 2
        assert len(results) == 2
        image = analyze.await_args.args[0]
        assert base64.b64decode(image)[:2] == b"\xff\xd8"

    async def test_errors_do_not_stop_the_loop(self):
        errors = []
        analyze = AsyncMock(side_effect=FunctionCallError("Rate limit exceeded", 429))

        def on_error(error):
            errors.append(error)
            if len(errors) == 3:
                analyzer.stop()

        analyzer = AutoAnalyzer(black_frame, analyze, lambda analysis: None, on_error=on_error, interval=0.01)
        await analyzer.run()

        assert analyzer.runs == 3
        assert all(isinstance(e, FunctionCallError) for e in errors)

    async def test_missing_frame_is_skipped(self):
        analyze = AsyncMock()
        analyzer = AutoAnalyzer(lambda: None, analyze, lambda analysis: None)

        assert await analyzer.analyze_once() is None
        analyze.assert_not_awaited()

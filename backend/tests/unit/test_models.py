"""
数据模型单元测试

每个模块完成后必须运行：pytest tests/unit/test_models.py -v
"""

import math

import pytest
from pydantic import ValidationError

from pdfsign.models import (
    AnnotationPayload,
    FieldType,
    RenderRequest,
    RenderResult,
    SessionStatus,
    SignField,
    Viewport,
    can_transition,
)


class TestViewport:
    """视口测试"""

    def test_ready(self, a4_viewport: Viewport):
        assert a4_viewport.is_ready
        assert a4_viewport.zoom == pytest.approx(600 / 595)

    @pytest.mark.parametrize("rw", [0, -1, math.nan, math.inf])
    def test_not_ready(self, rw):
        vp = Viewport(page_number=1, rendered_width=rw, rendered_height=800,
                      native_width=595, native_height=842)
        assert not vp.is_ready

    def test_contains_inclusive(self, a4_viewport: Viewport):
        assert a4_viewport.contains(0, 0)
        assert a4_viewport.contains(600, 800)
        assert not a4_viewport.contains(600.01, 10)
        assert not a4_viewport.contains(10, -0.01)

    def test_page_number_positive(self):
        with pytest.raises(ValidationError):
            Viewport(page_number=0, rendered_width=1, rendered_height=1,
                     native_width=1, native_height=1)


class TestSignField:
    """字段模型测试"""

    @pytest.fixture
    def field(self, a4_viewport: Viewport) -> SignField:
        return SignField(
            id="f1", type=FieldType.NAME, page=1, x=100, y=200, width=150, height=30,
            font_size=18, viewport_snapshot=a4_viewport,
        )

    def test_frozen(self, field: SignField):
        with pytest.raises(ValidationError):
            field.x = 5

    def test_is_complete(self, field: SignField):
        assert not field.is_complete
        assert field.model_copy(update={"content": "Jane"}).is_complete

    def test_edges(self, field: SignField):
        assert (field.right, field.bottom) == (250, 230)


class TestRenderContract:
    """渲染契约测试"""

    def test_to_wire_camel_case(self):
        request = RenderRequest(
            document_id="doc-9",
            signatures=[
                AnnotationPayload(page=2, x=1, y=2, width=3, height=4,
                                  type="signature", content="J", font_size=12),
            ],
        )
        wire = request.to_wire()
        assert wire["documentId"] == "doc-9"
        assert wire["signatures"][0]["fontSize"] == 12
        assert wire["signatures"][0]["type"] == "signature"
        assert request.pages() == [2]

    def test_result_from_wire(self):
        result = RenderResult.model_validate({"success": True, "signedFileUrl": "u/s.pdf"})
        assert result.signed_file_url == "u/s.pdf"
        assert result.message is None


class TestSessionStatus:
    """状态迁移测试"""

    @pytest.mark.parametrize(
        "current,target,allowed",
        [
            (SessionStatus.EDITING, SessionStatus.FINALIZING, True),
            (SessionStatus.FINALIZING, SessionStatus.FINALIZED, True),
            (SessionStatus.FINALIZING, SessionStatus.EDITING, True),
            (SessionStatus.EDITING, SessionStatus.FINALIZED, False),
            (SessionStatus.FINALIZED, SessionStatus.EDITING, False),
            (SessionStatus.FINALIZED, SessionStatus.FINALIZING, False),
        ],
    )
    def test_can_transition(self, current, target, allowed):
        assert can_transition(current, target) is allowed

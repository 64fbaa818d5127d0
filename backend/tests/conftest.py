"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(session, a4_viewport):
        field = session.place_field("name", 100, 200)
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from pypdf import PdfWriter

from pdfsign.config import FieldRules, RuntimeConfig
from pdfsign.interfaces import IRenderBackend
from pdfsign.models import RenderRequest, RenderResult, Viewport
from pdfsign.render import MeasuredViewportProvider
from pdfsign.session import EditSession

A4_NATIVE = (595.0, 842.0)
RENDERED = (600.0, 800.0)

DOCUMENTS_DIR = Path(__file__).resolve().parents[1] / "documents"


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def rules() -> FieldRules:
    """内置默认字段规则"""
    return FieldRules()


@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置"""
    return RuntimeConfig()


# ============================================================================
# 视口 Fixtures
# ============================================================================

@pytest.fixture
def a4_viewport() -> Viewport:
    """600x800 渲染的 A4 页面"""
    return Viewport(
        page_number=1,
        rendered_width=RENDERED[0],
        rendered_height=RENDERED[1],
        native_width=A4_NATIVE[0],
        native_height=A4_NATIVE[1],
    )


@pytest.fixture
def provider() -> MeasuredViewportProvider:
    """两页A4文档，只有第1页完成了渲染测量"""
    p = MeasuredViewportProvider([A4_NATIVE, A4_NATIVE])
    p.report_render(1, *RENDERED)
    return p


@pytest.fixture
def session(provider: MeasuredViewportProvider, rules: FieldRules) -> EditSession:
    """文档编辑会话"""
    return EditSession("doc-1", provider, rules=rules, date_format="%m/%d/%Y")


# ============================================================================
# 渲染后端 Fixtures
# ============================================================================

class RecordingBackend(IRenderBackend):
    """记录请求的假渲染后端"""

    def __init__(self, result: RenderResult | None = None, error: Exception | None = None):
        self.result = result or RenderResult(success=True, signed_file_url="user/signed_doc.pdf")
        self.error = error
        self.requests: list[RenderRequest] = []

    async def render(self, request: RenderRequest) -> RenderResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def backend_factory() -> type[RecordingBackend]:
    """按需构造带指定结果/异常的假后端"""
    return RecordingBackend


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_pdf(temp_dir: Path) -> Path:
    """两页空白A4 PDF"""
    pdf_path = temp_dir / "contract.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=A4_NATIVE[0], height=A4_NATIVE[1])
    writer.add_blank_page(width=A4_NATIVE[0], height=A4_NATIVE[1])
    with open(pdf_path, "wb") as f:
        writer.write(f)
    return pdf_path

"""
编辑会话单元测试

每个模块完成后必须运行：pytest tests/unit/test_session.py -v
"""

import pytest

from pdfsign.interfaces import (
    EmptyFieldSetError,
    FieldNotFoundError,
    FinalizationBlockedError,
    IncompleteFieldError,
    NotReadyError,
    SessionStateError,
)
from pdfsign.models import FieldType, FontId, SessionStatus
from pdfsign.pipeline import SessionManager
from pdfsign.render import MeasuredViewportProvider
from pdfsign.session import MSG_EMPTY_FIELD_SET, MSG_INCOMPLETE_FIELD, EditSession


class TestPlacement:
    """放置模式与点击"""

    def test_click_without_placement_mode(self, session: EditSession):
        assert session.handle_click(100, 200) is None
        assert session.fields == ()

    def test_handle_click_places_field(self, session: EditSession):
        """放置后退出放置模式"""
        session.start_placement("name")
        field = session.handle_click(100, 200)
        assert field is not None
        assert session.fields == (field,)
        assert session.placement_mode is None
        # 姓名框不进入签名输入
        assert session.selected_field_id is None

    def test_signature_selected_after_place(self, session: EditSession):
        """签名框放置后等待输入"""
        session.start_placement(FieldType.SIGNATURE)
        field = session.handle_click(50, 50)
        assert session.selected_field_id == field.id

    def test_apply_signature(self, session: EditSession):
        session.start_placement(FieldType.INITIALS)
        field = session.handle_click(50, 50)
        signed = session.apply_signature("J.D.", "helvetica-oblique")
        assert signed.id == field.id
        assert signed.content == "J.D."
        assert signed.font == FontId.HELVETICA_OBLIQUE
        assert session.selected_field_id is None
        assert session.get_field(field.id) == signed

    def test_apply_signature_without_selection(self, session: EditSession):
        with pytest.raises(FieldNotFoundError):
            session.apply_signature("Jane", FontId.HELVETICA)

    def test_click_out_of_bounds_ignored(self, session: EditSession):
        """越界点击静默忽略，仍处于放置模式"""
        session.start_placement("text")
        assert session.handle_click(700, 10) is None
        assert session.fields == ()
        assert session.placement_mode == FieldType.TEXT

    def test_click_on_unmeasured_page_ignored(self, session: EditSession):
        """第2页未完成测量，点击不创建字段"""
        session.go_to_page(2)
        session.start_placement("text")
        assert session.handle_click(10, 10) is None
        assert session.fields == ()

    def test_place_field_on_unmeasured_page_raises(self, session: EditSession):
        with pytest.raises(NotReadyError):
            session.place_field("text", 10, 10, page=2)

    def test_go_to_page_clamped(self, session: EditSession):
        session.go_to_page(5)
        assert session.current_page == 2
        session.go_to_page(0)
        assert session.current_page == 1

    def test_zoom_invalidates_viewport(
        self, session: EditSession, provider: MeasuredViewportProvider
    ):
        """缩放导致旧测量失效后，重新上报之前不能放置"""
        provider.invalidate(1)
        with pytest.raises(NotReadyError):
            session.place_field("text", 10, 10)
        provider.report_render(1, 900, 1200)
        field = session.place_field("text", 10, 10)
        assert field.viewport_snapshot.rendered_width == 900


class TestEditing:
    """字段编辑"""

    def test_set_content_and_font(self, session: EditSession):
        field = session.place_field("company", 100, 100)
        session.set_content(field.id, "  Acme\nCorp ")
        session.set_font(field.id, "times-roman-bold")
        stored = session.get_field(field.id)
        assert stored.content == "Acme Corp"
        assert stored.font == FontId.TIMES_ROMAN_BOLD

    def test_remove_clears_selection(self, session: EditSession):
        field = session.place_field("signature", 100, 100)
        assert session.selected_field_id == field.id
        session.remove(field.id)
        assert session.fields == ()
        assert session.selected_field_id is None

    def test_unknown_field(self, session: EditSession):
        with pytest.raises(FieldNotFoundError):
            session.set_content("missing", "x")
        with pytest.raises(FieldNotFoundError):
            session.select("missing")

    def test_fields_on_page(self, session: EditSession, provider: MeasuredViewportProvider):
        provider.report_render(2, 600, 800)
        a = session.place_field("text", 10, 10, page=1)
        b = session.place_field("text", 10, 10, page=2)
        assert session.fields_on_page(1) == [a]
        assert session.fields_on_page(2) == [b]


class TestInteraction:
    """拖动/缩放交互"""

    def test_drag_preview_not_committed(self, session: EditSession):
        """拖动过程中只更新预览"""
        field = session.place_field("name", 100, 200)
        session.begin_drag(field.id)
        preview = session.drag_to(300, 400)
        assert (preview.x, preview.y) == (300, 400)
        assert session.get_field(field.id).x == 100
        assert session.visible_field(field.id) == preview

        committed = session.end_drag()
        assert session.get_field(field.id) == committed
        assert session.interaction is None

    def test_release_outside_page_clamped(self, session: EditSession):
        field = session.place_field("name", 100, 200)
        session.begin_drag(field.id)
        committed = session.end_drag(2000, 2000)
        assert (committed.x, committed.y) == (445, 765)

    def test_cancel_drag(self, session: EditSession):
        field = session.place_field("name", 100, 200)
        session.begin_drag(field.id)
        session.drag_to(300, 400)
        session.cancel_interaction()
        assert session.get_field(field.id) == field
        assert session.visible_field(field.id) == field

    def test_resize(self, session: EditSession):
        field = session.place_field("signature", 100, 200)
        session.begin_resize(field.id)
        session.resize_to(10, 5)
        committed = session.end_resize()
        assert (committed.width, committed.height) == (60, 20)

    def test_wrong_interaction_kind(self, session: EditSession):
        field = session.place_field("name", 100, 200)
        session.begin_drag(field.id)
        with pytest.raises(SessionStateError):
            session.resize_to(100, 100)

    def test_drag_on_invalidated_page_ignored(
        self, session: EditSession, provider: MeasuredViewportProvider
    ):
        """拖动中页面测量失效：保留上一次预览，结束时提交它"""
        field = session.place_field("name", 100, 200)
        session.begin_drag(field.id)
        session.drag_to(300, 400)
        provider.invalidate(1)

        preview = session.drag_to(10, 10)
        assert (preview.x, preview.y) == (300, 400)

        committed = session.end_drag(5, 5)
        assert (committed.x, committed.y) == (300, 400)
        assert session.get_field(field.id) == committed
        assert session.interaction is None

    def test_resize_on_invalidated_page_ignored(
        self, session: EditSession, provider: MeasuredViewportProvider
    ):
        field = session.place_field("signature", 100, 200)
        session.begin_resize(field.id)
        provider.invalidate()

        assert session.resize_to(10, 5) == field
        assert session.end_resize(10, 5) == field
        assert session.get_field(field.id) == field
        assert session.interaction is None

    def test_remove_during_drag(self, session: EditSession):
        field = session.place_field("name", 100, 200)
        session.begin_drag(field.id)
        session.remove(field.id)
        assert session.interaction is None


class TestFinalizable:
    """定稿前置检查"""

    def test_empty_field_set(self, session: EditSession):
        with pytest.raises(EmptyFieldSetError):
            session.begin_finalizing()
        assert session.status == SessionStatus.EDITING
        assert session.last_error == MSG_EMPTY_FIELD_SET

    def test_incomplete_field(self, session: EditSession):
        session.place_field("signature", 100, 100)
        with pytest.raises(IncompleteFieldError):
            session.begin_finalizing()
        assert session.status == SessionStatus.EDITING
        assert session.last_error == MSG_INCOMPLETE_FIELD

    def test_blocked_errors_share_base(self, session: EditSession):
        with pytest.raises(FinalizationBlockedError):
            session.check_finalizable()

    def test_date_field_is_complete(self, session: EditSession):
        """日期字段自动填充，可直接定稿"""
        session.place_field("date", 100, 100)
        session.begin_finalizing()
        assert session.status == SessionStatus.FINALIZING
        assert session.last_error is None


class TestStateMachine:
    """状态机"""

    @pytest.fixture
    def finalizing(self, session: EditSession) -> EditSession:
        field = session.place_field("name", 100, 200)
        session.begin_drag(field.id)
        session.set_content(field.id, "Jane")
        session.begin_finalizing()
        return session

    def test_begin_finalizing_clears_interaction(self, finalizing: EditSession):
        assert finalizing.interaction is None
        assert finalizing.placement_mode is None

    def test_double_begin_rejected(self, finalizing: EditSession):
        with pytest.raises(SessionStateError):
            finalizing.begin_finalizing()
        assert finalizing.status == SessionStatus.FINALIZING

    def test_edits_rejected_when_finalizing(self, finalizing: EditSession):
        field_id = finalizing.fields[0].id
        with pytest.raises(SessionStateError):
            finalizing.set_content(field_id, "x")
        with pytest.raises(SessionStateError):
            finalizing.place_field("text", 10, 10)
        with pytest.raises(SessionStateError):
            finalizing.begin_drag(field_id)

    def test_revert_keeps_fields(self, finalizing: EditSession):
        before = finalizing.fields
        finalizing.revert_to_editing("Failed to finalize document")
        assert finalizing.status == SessionStatus.EDITING
        assert finalizing.fields == before
        assert finalizing.last_error == "Failed to finalize document"

    def test_edits_rejected_when_finalized(self, finalizing: EditSession):
        finalizing.mark_finalized("user/signed.pdf")
        assert finalizing.status == SessionStatus.FINALIZED
        assert finalizing.signed_file_url == "user/signed.pdf"
        with pytest.raises(SessionStateError):
            finalizing.remove(finalizing.fields[0].id)
        with pytest.raises(SessionStateError):
            finalizing.begin_finalizing()
        with pytest.raises(SessionStateError):
            finalizing.revert_to_editing("x")

    def test_click_ignored_when_finalized(self, finalizing: EditSession):
        finalizing.mark_finalized("user/signed.pdf")
        finalizing.placement_mode = FieldType.TEXT
        assert finalizing.handle_click(10, 10) is None


class TestSessionManager:
    """会话管理"""

    def test_open_and_get(self, provider: MeasuredViewportProvider, rules):
        manager = SessionManager(rules=rules)
        session = manager.open_session("doc-a", provider)
        assert manager.get_session("doc-a") is session
        assert manager.open_session("doc-a", provider) is session

    def test_sessions_independent(self, provider: MeasuredViewportProvider, rules):
        manager = SessionManager(rules=rules)
        a = manager.open_session("doc-a", provider)
        b = manager.open_session("doc-b", provider)
        a.place_field("text", 10, 10)
        assert len(a.fields) == 1
        assert b.fields == ()

    def test_list_and_discard(self, provider: MeasuredViewportProvider, rules):
        manager = SessionManager(rules=rules)
        a = manager.open_session("doc-a", provider)
        manager.open_session("doc-b", provider)
        a.place_field("date", 10, 10)
        a.begin_finalizing()
        assert manager.list_sessions(SessionStatus.FINALIZING) == [a]
        assert len(manager.list_sessions()) == 2
        assert manager.discard_session("doc-a") is True
        assert manager.discard_session("doc-a") is False
        assert manager.get_session("doc-a") is None

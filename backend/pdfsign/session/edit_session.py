"""
编辑会话 - 单个文档的签署编辑状态

职责：
1. 持有字段集合（每次编辑整体替换，可视为不可变快照）
2. 放置模式、当前选中字段、当前页
3. 拖动/缩放交互：过程中只更新预览，结束时才提交
4. 会话状态机 EDITING -> FINALIZING -> FINALIZED

测试要点：
- test_handle_click_places_field: 点击放置
- test_handle_click_suppresses_out_of_bounds: 越界点击静默忽略
- test_drag_preview_not_committed: 拖动预览不提交
- test_edits_rejected_when_finalized: 定稿后拒绝编辑
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..config import FieldRules, get_config, load_rules
from ..geometry import field_ops
from ..interfaces import (
    EmptyFieldSetError,
    FieldNotFoundError,
    IncompleteFieldError,
    NotReadyError,
    OutOfBoundsError,
    SessionStateError,
)
from ..models import (
    SIGNATURE_LIKE_TYPES,
    FieldType,
    FontId,
    SessionStatus,
    SignField,
    Viewport,
    can_transition,
)

if TYPE_CHECKING:
    from ..interfaces import IViewportProvider

logger = logging.getLogger(__name__)

MSG_EMPTY_FIELD_SET = "Please add at least one signature before finalizing"
MSG_INCOMPLETE_FIELD = "Please complete all signature fields"


@dataclass
class Interaction:
    """进行中的拖动或缩放"""
    kind: str                 # "drag" | "resize"
    field_id: str
    original: SignField
    preview: SignField


class EditSession:
    """文档编辑会话"""

    def __init__(
        self,
        document_id: str,
        viewport_provider: IViewportProvider,
        rules: FieldRules | None = None,
        date_format: str | None = None,
    ):
        self.document_id = document_id
        self.viewports = viewport_provider
        self.rules = rules or load_rules()
        self.date_format = date_format or get_config().editor.date_format

        self.status = SessionStatus.EDITING
        self.current_page = 1
        self.placement_mode: FieldType | None = None
        self.selected_field_id: str | None = None

        self.last_error: str | None = None
        self.signed_file_url: str | None = None

        self._fields: tuple[SignField, ...] = ()
        self._interaction: Interaction | None = None

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    @property
    def fields(self) -> tuple[SignField, ...]:
        """已提交的字段快照"""
        return self._fields

    @property
    def interaction(self) -> Interaction | None:
        return self._interaction

    @property
    def is_editable(self) -> bool:
        return self.status == SessionStatus.EDITING

    def get_field(self, field_id: str) -> SignField:
        """按id获取已提交字段"""
        for f in self._fields:
            if f.id == field_id:
                return f
        raise FieldNotFoundError(f"字段不存在: {field_id}")

    def fields_on_page(self, page: int) -> list[SignField]:
        return [f for f in self._fields if f.page == page]

    def visible_field(self, field_id: str) -> SignField:
        """带交互预览的字段（用于即时显示）"""
        if self._interaction and self._interaction.field_id == field_id:
            return self._interaction.preview
        return self.get_field(field_id)

    def visible_fields(self, page: int) -> list[SignField]:
        return [self.visible_field(f.id) for f in self.fields_on_page(page)]

    def incomplete_fields(self) -> list[SignField]:
        return [f for f in self._fields if not f.is_complete]

    # ------------------------------------------------------------------
    # 页面与放置模式
    # ------------------------------------------------------------------

    def go_to_page(self, page: int) -> None:
        """切换当前页（限制在文档页数内）"""
        total = self.viewports.page_count()
        self.current_page = min(max(1, page), max(1, total))

    def start_placement(self, field_type: FieldType | str) -> None:
        self._require_editable()
        self.placement_mode = FieldType(field_type)

    def cancel_placement(self) -> None:
        self.placement_mode = None

    def handle_click(self, click_x: float, click_y: float) -> SignField | None:
        """
        处理页面点击：处于放置模式时在当前页放置字段

        视口未就绪或点击越界时静默忽略，返回 None。
        """
        if self.placement_mode is None or not self.is_editable:
            return None

        try:
            field = self.place_field(self.placement_mode, click_x, click_y)
        except NotReadyError as e:
            logger.warning(f"[{self.document_id}] 页面未就绪，忽略点击: {e}")
            return None
        except OutOfBoundsError as e:
            logger.debug(f"[{self.document_id}] 点击越界，忽略: {e}")
            return None

        # 放置后退出放置模式
        self.placement_mode = None
        return field

    def place_field(
        self,
        field_type: FieldType | str,
        click_x: float,
        click_y: float,
        page: int | None = None,
    ) -> SignField:
        """放置字段（异常直接抛出）"""
        self._require_editable()
        viewport = self._viewport(page or self.current_page)
        field = field_ops.place(
            field_type,
            click_x,
            click_y,
            viewport,
            rules=self.rules,
            date_format=self.date_format,
        )
        self._fields = self._fields + (field,)

        # 签名/缩写放置后等待输入内容
        if field.type in SIGNATURE_LIKE_TYPES:
            self.selected_field_id = field.id
        return field

    # ------------------------------------------------------------------
    # 内容与字体
    # ------------------------------------------------------------------

    def set_content(self, field_id: str, raw_text: str) -> SignField:
        self._require_editable()
        field = field_ops.set_content(self.get_field(field_id), raw_text, self.rules)
        self._replace(field)
        return field

    def set_font(self, field_id: str, font: FontId | str | None) -> SignField:
        self._require_editable()
        field = field_ops.set_font(self.get_field(field_id), font)
        self._replace(field)
        return field

    def apply_signature(self, text: str, font: FontId | str) -> SignField:
        """为当前选中字段写入签名文本与字体，并清除选中"""
        self._require_editable()
        if self.selected_field_id is None:
            raise FieldNotFoundError("没有待填写的字段")
        field = self.get_field(self.selected_field_id)
        field = field_ops.set_font(field, font)
        field = field_ops.set_content(field, text, self.rules)
        self._replace(field)
        self.selected_field_id = None
        return field

    def select(self, field_id: str | None) -> None:
        if field_id is not None:
            self.get_field(field_id)
        self.selected_field_id = field_id

    def remove(self, field_id: str) -> None:
        """删除字段；若为选中字段则清除选中"""
        self._require_editable()
        self.get_field(field_id)
        self._fields = tuple(f for f in self._fields if f.id != field_id)
        if self.selected_field_id == field_id:
            self.selected_field_id = None
        if self._interaction and self._interaction.field_id == field_id:
            self._interaction = None

    # ------------------------------------------------------------------
    # 拖动 / 缩放
    # ------------------------------------------------------------------

    def begin_drag(self, field_id: str) -> None:
        self._begin("drag", field_id)

    def drag_to(self, x: float, y: float) -> SignField:
        """
        拖动过程中的位置更新（只更新预览）

        页面未就绪时忽略本次更新，返回上一次的预览。
        """
        interaction = self._active("drag")
        try:
            viewport = self._viewport(interaction.original.page)
            interaction.preview = field_ops.move(interaction.original, x, y, viewport, self.rules)
        except NotReadyError as e:
            logger.warning(f"[{self.document_id}] 页面未就绪，忽略拖动: {e}")
        return interaction.preview

    def end_drag(self, x: float | None = None, y: float | None = None) -> SignField:
        """结束拖动并提交最后一次有效预览；释放点在页面外时落到钳制后的位置"""
        if x is not None and y is not None:
            self.drag_to(x, y)
        return self._commit("drag")

    def begin_resize(self, field_id: str) -> None:
        self._begin("resize", field_id)

    def resize_to(self, width: float, height: float) -> SignField:
        interaction = self._active("resize")
        try:
            viewport = self._viewport(interaction.original.page)
            interaction.preview = field_ops.resize(
                interaction.original, width, height, viewport, self.rules
            )
        except NotReadyError as e:
            logger.warning(f"[{self.document_id}] 页面未就绪，忽略缩放: {e}")
        return interaction.preview

    def end_resize(self, width: float | None = None, height: float | None = None) -> SignField:
        if width is not None and height is not None:
            self.resize_to(width, height)
        return self._commit("resize")

    def cancel_interaction(self) -> None:
        """放弃进行中的拖动/缩放，字段保持原状"""
        self._interaction = None

    # ------------------------------------------------------------------
    # 状态机
    # ------------------------------------------------------------------

    def check_finalizable(self) -> None:
        """
        定稿前置检查

        Raises:
            EmptyFieldSetError: 没有字段
            IncompleteFieldError: 有字段内容为空
        """
        if not self._fields:
            self.last_error = MSG_EMPTY_FIELD_SET
            raise EmptyFieldSetError(MSG_EMPTY_FIELD_SET)
        incomplete = self.incomplete_fields()
        if incomplete:
            self.last_error = MSG_INCOMPLETE_FIELD
            raise IncompleteFieldError(
                f"{MSG_INCOMPLETE_FIELD} ({len(incomplete)} incomplete)"
            )

    def begin_finalizing(self) -> None:
        """EDITING -> FINALIZING（前置检查不通过时保持 EDITING）"""
        if self.status == SessionStatus.FINALIZING:
            raise SessionStateError("定稿进行中，不能重复提交")
        self._require_editable()
        self.check_finalizable()
        self._transition(SessionStatus.FINALIZING)
        self._interaction = None
        self.placement_mode = None
        self.last_error = None

    def mark_finalized(self, signed_file_url: str) -> None:
        self._transition(SessionStatus.FINALIZED)
        self.signed_file_url = signed_file_url
        self.selected_field_id = None

    def revert_to_editing(self, error: str) -> None:
        """后端失败：回到编辑态，字段保持不变"""
        self._transition(SessionStatus.EDITING)
        self.last_error = error

    # ------------------------------------------------------------------
    # 内部
    # ------------------------------------------------------------------

    def _viewport(self, page: int) -> Viewport:
        viewport = self.viewports.get_viewport(page)
        if viewport is None:
            raise NotReadyError(f"第{page}页尚未完成渲染测量")
        return viewport

    def _require_editable(self) -> None:
        if not self.is_editable:
            raise SessionStateError(f"会话状态为 {self.status.value}，不允许编辑")

    def _transition(self, target: SessionStatus) -> None:
        if not can_transition(self.status, target):
            raise SessionStateError(f"非法状态迁移: {self.status.value} -> {target.value}")
        logger.info(f"[{self.document_id}] 状态: {self.status.value} -> {target.value}")
        self.status = target

    def _replace(self, field: SignField) -> None:
        self._fields = tuple(field if f.id == field.id else f for f in self._fields)

    def _begin(self, kind: str, field_id: str) -> None:
        self._require_editable()
        field = self.get_field(field_id)
        self._interaction = Interaction(kind=kind, field_id=field_id, original=field, preview=field)

    def _active(self, kind: str) -> Interaction:
        self._require_editable()
        if self._interaction is None or self._interaction.kind != kind:
            raise SessionStateError(f"没有进行中的{kind}操作")
        return self._interaction

    def _commit(self, kind: str) -> SignField:
        interaction = self._active(kind)
        self._replace(interaction.preview)
        self._interaction = None
        return interaction.preview

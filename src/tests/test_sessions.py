"""Tests for row edit sessions.

Tests coverage:
- Add session defaults per editor type
- Edit session newline escaping
- Save success/failure transitions and stale saves
- Session factory
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from models import (
    ACTIONS_COLUMN_ID,
    ColumnConfig,
    ColumnEditConfig,
    ColumnEditorConfig,
    ColumnEditorType,
    ColumnNewRowEditConfig,
    DraftRow,
    FieldReference,
)
from sessions import (
    AddSession,
    DeleteSession,
    EditSession,
    SessionState,
    create_session,
    escape_newlines,
    get_new_row_default,
    unescape_newlines,
)

NOW = '2024-01-01T00:00:00+00:00'


def _column(name, editor_type=None, editor_min=None, edit=False, new_row=False):
    editor = ColumnEditorConfig(type=editor_type or ColumnEditorType.STRING, min=editor_min)
    return ColumnConfig(
        field=FieldReference(name=name),
        edit=ColumnEditConfig(enabled=edit, editor=editor),
        new_row_edit=ColumnNewRowEditConfig(enabled=new_row, editor=editor),
    )


class TestNewRowDefaults:
    """Test suite for ``get_new_row_default``."""

    def test_defaults_by_editor(self):
        assert get_new_row_default(None) == ''
        assert get_new_row_default(ColumnEditorConfig(type=ColumnEditorType.BOOLEAN)) is False
        assert get_new_row_default(ColumnEditorConfig(type=ColumnEditorType.NUMBER)) == 0
        assert get_new_row_default(ColumnEditorConfig(type=ColumnEditorType.NUMBER, min=5)) == 5
        assert get_new_row_default(ColumnEditorConfig(type=ColumnEditorType.SELECT)) == ''
        assert get_new_row_default(ColumnEditorConfig(type=ColumnEditorType.TEXTAREA)) == ''

    def test_datetime_default(self):
        assert get_new_row_default(ColumnEditorConfig(type=ColumnEditorType.DATETIME), lambda: NOW) == NOW
        editor = ColumnEditorConfig(type=ColumnEditorType.DATETIME, min='2023-05-01T00:00:00Z')
        assert get_new_row_default(editor, lambda: NOW) == '2023-05-01T00:00:00Z'


class TestAddSession:
    """Test suite for ``AddSession``."""

    def setup_method(self):
        self.columns = [
            _column('name', new_row=True),
            _column('amount', ColumnEditorType.NUMBER, editor_min=5, new_row=True),
            _column('active', ColumnEditorType.BOOLEAN, new_row=True),
            _column('created', ColumnEditorType.DATETIME, new_row=True),
            _column('notes', ColumnEditorType.NUMBER),
            _column(ACTIONS_COLUMN_ID),
        ]
        self.save = AsyncMock()
        self.session = AddSession(self.columns, self.save, now=lambda: NOW)

    def test_start_builds_defaults(self):
        """Disabled new-row editors get an empty string, actions column is skipped."""
        draft = self.session.on_start()

        assert draft.id == '0'
        assert draft.index == 0
        assert draft.depth == 0
        assert dict(draft.original) == {
            'name': '',
            'amount': 5,
            'active': False,
            'created': NOW,
            'notes': '',
        }
        assert self.session.state == SessionState.EDITING

    def test_start_replaces_existing_draft(self):
        first = self.session.on_start()
        self.session.on_change(first, 'name', 'changed')
        second = self.session.on_start()

        assert second.original['name'] == ''
        assert self.session.row == second

    def test_save_unescapes_textarea(self):
        columns = [_column('body', ColumnEditorType.TEXTAREA, new_row=True)]
        session = AddSession(columns, self.save, now=lambda: NOW)
        draft = session.on_start()
        draft = session.on_change(draft, 'body', 'line 1\\nline 2')

        asyncio.run(session.on_save(draft))

        self.save.assert_awaited_once_with({'body': 'line 1\nline 2'})
        assert session.row is None


    def test_save_keeps_escaped_backslash(self):
        columns = [_column('path', ColumnEditorType.TEXTAREA, new_row=True)]
        session = AddSession(columns, self.save, now=lambda: NOW)
        draft = session.on_start()
        draft = session.on_change(draft, 'path', 'C:\\\\new')

        asyncio.run(session.on_save(draft))

        self.save.assert_awaited_once_with({'path': 'C:\\new'})


class TestNewlineEscaping:
    """Escaping is reversible for any text."""

    @pytest.mark.parametrize('value', [
        'plain',
        'two\nlines',
        'C:\\new\\dir',
        '{"a": "x\\ny"}',
        'trailing\\',
        '',
    ])
    def test_round_trip(self, value):
        assert unescape_newlines(escape_newlines(value)) == value

    def test_escaped_form(self):
        assert escape_newlines('a\nb') == 'a\\nb'
        assert escape_newlines('a\\b') == 'a\\\\b'

    def test_non_strings_untouched(self):
        assert escape_newlines(5) == 5
        assert unescape_newlines(None) is None

    def test_lone_backslash_kept(self):
        assert unescape_newlines('a\\b') == 'a\\b'


class TestEditSession:
    """Test suite for ``EditSession``."""

    def setup_method(self):
        self.columns = [
            _column('id'),
            _column('notes', ColumnEditorType.TEXTAREA, edit=True),
            _column('title', edit=True),
        ]
        self.save = AsyncMock()
        self.session = EditSession(self.columns, self.save)

    def test_start_escapes_newlines(self):
        draft = self.session.on_start({'id': 7, 'notes': 'a\nb', 'title': 'x\ny'})

        assert draft.original['notes'] == 'a\\nb'
        # only textarea columns are escaped
        assert draft.original['title'] == 'x\ny'

    def test_change_then_save(self):
        draft = self.session.on_start(DraftRow(id='7', original={'id': 7, 'notes': 'a\nb', 'title': 't'}))
        draft = self.session.on_change(draft, 'title', 'new title')

        asyncio.run(self.session.on_save())

        self.save.assert_awaited_once_with({'id': 7, 'notes': 'a\nb', 'title': 'new title'})
        assert self.session.row is None
        assert self.session.state == SessionState.IDLE

    def test_literal_backslash_n_round_trips(self):
        """Text that already holds a backslash followed by n is saved unchanged."""
        draft = self.session.on_start({'id': 7, 'notes': 'C:\\new\\dir', 'title': 't'})

        asyncio.run(self.session.on_save(draft))

        self.save.assert_awaited_once_with({'id': 7, 'notes': 'C:\\new\\dir', 'title': 't'})

    def test_mixed_newlines_and_backslashes_round_trip(self):
        value = 'first line\nregex: \\d+\\n\\\\'
        self.session.on_start({'id': 7, 'notes': value})

        asyncio.run(self.session.on_save())

        assert self.save.await_args[0][0]['notes'] == value

    def test_start_keeps_row_identity(self):
        draft = self.session.on_start({'id': 7, 'notes': ''}, row_id='7', index=3, depth=1)

        assert (draft.id, draft.index, draft.depth) == ('7', 3, 1)

        draft = self.session.on_change(draft, 'title', 'x')
        assert (draft.id, draft.index, draft.depth) == ('7', 3, 1)

    def test_start_keeps_draft_row_identity(self):
        draft = self.session.on_start(DraftRow(id='12', original={'notes': 'a\nb'}, index=4, depth=2))
        assert (draft.id, draft.index, draft.depth) == ('12', 4, 2)
        assert draft.original['notes'] == 'a\\nb'

    def test_change_ignored_when_idle(self):
        assert self.session.on_change(DraftRow(id='1'), 'title', 'x') is None
        assert self.session.row is None

    def test_start_requires_row(self):
        with pytest.raises(ValueError):
            self.session.on_start()

    def test_cancel(self):
        self.session.on_start({'id': 1})
        self.session.on_cancel()
        assert self.session.row is None
        assert self.session.state == SessionState.IDLE

    def test_save_without_draft_is_noop(self):
        asyncio.run(self.session.on_save())
        self.save.assert_not_awaited()


class TestSaveTransitions:
    """Saving state machine shared by every session."""

    def test_is_saving_while_in_flight(self):
        seen = []

        async def save(row):
            seen.append((session.is_saving, session.state))

        session = DeleteSession([], save)
        session.on_start({'id': 1})
        asyncio.run(session.on_save())

        assert seen == [(True, SessionState.SAVING)]
        assert session.is_saving is False

    def test_failure_keeps_draft_and_raises(self):
        save = AsyncMock(side_effect=RuntimeError('boom'))
        session = DeleteSession([], save)
        draft = session.on_start({'id': 1})

        with pytest.raises(RuntimeError, match='boom'):
            asyncio.run(session.on_save())

        assert session.row == draft
        assert session.is_saving is False
        assert session.state == SessionState.EDITING
        assert str(session.last_error) == 'boom'

    def test_retry_after_failure_clears_error(self):
        save = AsyncMock(side_effect=[RuntimeError('boom'), None])
        session = DeleteSession([], save)
        session.on_start({'id': 1})

        with pytest.raises(RuntimeError):
            asyncio.run(session.on_save())
        asyncio.run(session.on_save())

        assert session.last_error is None
        assert session.row is None
        assert save.await_count == 2

    def test_stale_save_keeps_newer_draft(self):
        """A save that resolves after a new start leaves the new draft alone."""

        async def save(row):
            session.on_start({'id': 2})

        session = EditSession([], save)
        session.on_start({'id': 1})
        asyncio.run(session.on_save())

        assert session.row is not None
        assert session.row.original == {'id': 2}


class TestCreateSession:
    """Test suite for the session factory."""

    def test_binds_operation(self):
        executor = Mock()
        executor.execute = AsyncMock()

        add = create_session('add', [], executor)
        edit = create_session('edit', [], executor)
        delete = create_session('delete', [], executor)

        assert isinstance(add, AddSession)
        assert isinstance(edit, EditSession)
        assert isinstance(delete, DeleteSession)

        delete.on_start({'id': 3})
        asyncio.run(delete.on_save())
        executor.execute.assert_awaited_once_with('delete', {'id': 3})

    def test_unknown_operation(self):
        with pytest.raises(ValueError):
            create_session('archive', [], Mock())

import pytest

from notespace import folder_tree
from notespace.constants import INBOX_ID
from notespace.errors import DuplicateName, InvalidMove, NotFound, ProtectedEntity
from notespace.models import Folder, Note, make_inbox


def _folder(folder_id, parent_id=None, order=0, name=None) -> Folder:
    return Folder(id=folder_id, name=name or folder_id.upper(), parent_id=parent_id, order=order)


def _note(note_id, folder) -> Note:
    return Note(id=note_id, title=note_id, content='', folder=folder)


@pytest.fixture
def folders() -> list[Folder]:
    # inbox, a -> b -> c, a -> d, e
    return [
        make_inbox(),
        _folder('a', order=0),
        _folder('b', 'a', order=0),
        _folder('c', 'b'),
        _folder('d', 'a', order=1),
        _folder('e', order=1),
    ]


def test_build_tree_groups_by_parent_and_sorts_by_order(folders) -> None:
    shuffled = [folders[4], folders[2], folders[0], folders[5], folders[3], folders[1]]
    roots = folder_tree.build_tree(shuffled)

    assert [n.folder.id for n in roots] == [INBOX_ID, 'a', 'e']
    a = roots[1]
    assert [n.folder.id for n in a.children] == ['b', 'd']
    assert a.children[0].children[0].folder.id == 'c'
    assert a.children[0].children[0].depth == 2


def test_build_tree_from_subtree(folders) -> None:
    nodes = folder_tree.build_tree(folders, 'a')
    assert [n.folder.id for n in nodes] == ['b', 'd']


def test_descendant_ids_include_self(folders) -> None:
    assert folder_tree.get_descendant_ids(folders, 'a') == {'a', 'b', 'c', 'd'}
    assert folder_tree.get_descendant_ids(folders, 'c') == {'c'}


def test_breadcrumb_runs_from_root(folders) -> None:
    assert [f.id for f in folder_tree.get_breadcrumb(folders, 'c')] == ['a', 'b', 'c']
    assert [f.id for f in folder_tree.get_breadcrumb(folders, 'e')] == ['e']
    assert folder_tree.get_depth(folders, 'c') == 2


def test_cannot_move_into_own_subtree(folders) -> None:
    for target in folder_tree.get_descendant_ids(folders, 'a'):
        assert not folder_tree.can_move_folder(folders, 'a', target)
    assert folder_tree.can_move_folder(folders, 'a', 'e')


def test_move_rules(folders) -> None:
    assert not folder_tree.can_move_folder(folders, 'b', 'b')
    assert not folder_tree.can_move_folder(folders, 'b', INBOX_ID)
    assert not folder_tree.can_move_folder(folders, INBOX_ID, 'a')
    assert not folder_tree.can_move_folder(folders, 'b', 'missing')
    # Root is fine unless already there
    assert folder_tree.can_move_folder(folders, 'c', None)
    assert not folder_tree.can_move_folder(folders, 'e', None)
    assert folder_tree.can_move_folder(folders, 'c', 'e')


def test_move_folder_reparents_at_end(folders) -> None:
    moved = folder_tree.move_folder(folders, 'c', 'a')
    c = next(f for f in moved if f.id == 'c')
    assert c.parent_id == 'a'
    assert c.order == 2
    # Input untouched
    assert next(f for f in folders if f.id == 'c').parent_id == 'b'


def test_move_folder_rejects_cycle(folders) -> None:
    with pytest.raises(InvalidMove):
        folder_tree.move_folder(folders, 'a', 'c')


def test_delete_cascades_and_moves_notes_to_inbox(folders) -> None:
    notes = [_note('n1', 'a'), _note('n2', 'b'), _note('n3', 'c'), _note('n4', 'e')]

    new_folders, new_notes = folder_tree.delete_folder(folders, notes, 'a')

    assert {f.id for f in new_folders} == {INBOX_ID, 'e'}
    assert [n.folder for n in new_notes] == [INBOX_ID, INBOX_ID, INBOX_ID, 'e']
    assert new_notes[3] is notes[3]


def test_delete_inbox_is_protected(folders) -> None:
    with pytest.raises(ProtectedEntity):
        folder_tree.delete_folder(folders, [], INBOX_ID)
    with pytest.raises(NotFound):
        folder_tree.delete_folder(folders, [], 'missing')


def test_duplicate_names_are_per_parent(folders) -> None:
    assert folder_tree.find_duplicate_name(folders, 'B', 'a').id == 'b'
    assert folder_tree.find_duplicate_name(folders, 'B', None) is None
    assert folder_tree.find_duplicate_name(folders, 'B', 'a', exclude_id='b') is None

    with pytest.raises(DuplicateName, match='already exists in "A"'):
        folder_tree.validate_folder_name(folders, 'D', 'a')
    with pytest.raises(DuplicateName, match='at root level'):
        folder_tree.validate_folder_name(folders, 'E', None)


def test_reorder_folders_renumbers_siblings() -> None:
    folders = [make_inbox(), _folder('x', order=5), _folder('y', order=9), _folder('z', 'x', order=3)]
    orders = {f.id: f.order for f in folder_tree.reorder_folders(folders)}
    assert orders == {INBOX_ID: 0, 'x': 1, 'y': 2, 'z': 0}


def test_normalize_repairs_collection() -> None:
    folders = [
        _folder('a', 'b'),
        _folder('b', 'a'),
        _folder('orphan', 'gone'),
        _folder('under-inbox', INBOX_ID),
        _folder('orphan', name='dup'),
    ]

    fixed = {f.id: f for f in folder_tree.normalize_folders(folders)}

    assert INBOX_ID in fixed
    assert fixed['orphan'].parent_id is None
    assert fixed['orphan'].name == 'ORPHAN'
    assert fixed['under-inbox'].parent_id is None
    # The cycle is broken exactly once
    assert [fixed['a'].parent_id, fixed['b'].parent_id].count(None) == 1


def test_migrate_legacy_folders() -> None:
    notes_folders = {
        'inbox': {'id': 'inbox', 'name': 'Inbox'},
        'personal': {
            'id': 'personal',
            'name': 'Personal',
            'children': [{'id': 'health', 'name': 'Health', 'parent': 'personal'}],
        },
    }
    subfolders = [
        {'id': 'health', 'name': 'Health', 'parent': 'personal'},
        {'id': 'travel', 'name': 'Travel', 'parent': 'personal'},
    ]

    folders = {f.id: f for f in folder_tree.migrate_legacy_folders(notes_folders, subfolders)}

    assert set(folders) == {'inbox', 'personal', 'health', 'travel'}
    assert folders['health'].parent_id == 'personal'
    assert folders['travel'].parent_id == 'personal'
    assert folders['travel'].order == 1
    assert folders['personal'].parent_id is None


def test_counts_and_visibility(folders) -> None:
    notes = [_note('n1', 'a'), _note('n2', 'c'), Note(id='n3', title='', content='', folder='e', archived=True)]
    assert folder_tree.count_notes(folders, notes, 'a') == 2
    assert folder_tree.count_notes(folders, notes, 'a', recursive=False) == 1
    assert folder_tree.count_notes(folders, notes, 'e') == 0
    assert folder_tree.count_notes(folders, notes, 'e', include_archived=True) == 1

    archived_view = folder_tree.visible_folders(folders, notes, archived_view=True)
    assert [f.id for f in archived_view] == ['e']
    assert len(folder_tree.visible_folders(folders, notes)) == len(folders)

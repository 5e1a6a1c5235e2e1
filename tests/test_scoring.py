import pytest

from errors import Conflict, InvalidAssociation, NotFound, ValidationError
from scoring import ScoreStore


@pytest.fixture
def judged_event(make):
    event = make.event()
    return {
        'event': event,
        'project': make.project(event),
        'judge': make.judge(event),
        'criterion': make.criterion(event),
    }


def test_first_submission_creates_entry(store, judged_event):
    project, judge, criterion = judged_event['project'], judged_event['judge'], judged_event['criterion']

    result = store.submit_score(project.id, judge.id, criterion.id, 8, 'Solid idea')

    assert result.created is True
    assert result.entry.score == 8
    assert result.entry.comment == 'Solid idea'
    assert result.entry.project_id == project.id
    assert result.entry.created_at is not None


def test_resubmission_overwrites_in_place(store, storage, judged_event):
    project, judge, criterion = judged_event['project'], judged_event['judge'], judged_event['criterion']

    first = store.submit_score(project.id, judge.id, criterion.id, 8, 'first pass').entry
    first_id, first_created_at = first.id, first.created_at

    second = store.submit_score(project.id, judge.id, criterion.id, 6)

    assert second.created is False
    assert second.entry.id == first_id
    assert second.entry.created_at == first_created_at
    assert second.entry.score == 6
    # Comment is replaced too, not merged
    assert second.entry.comment is None

    entries = storage.get_project_scores_by_project(project.id)
    assert [(e.id, e.score) for e in entries] == [(first_id, 6)]


def test_same_value_twice_keeps_one_entry(store, storage, judged_event):
    project, judge, criterion = judged_event['project'], judged_event['judge'], judged_event['criterion']

    store.submit_score(project.id, judge.id, criterion.id, 7)
    store.submit_score(project.id, judge.id, criterion.id, 7)

    assert len(storage.get_project_scores_by_project(project.id)) == 1


def test_distinct_triples_are_separate_entries(store, storage, make, judged_event):
    event, project = judged_event['event'], judged_event['project']
    judge, criterion = judged_event['judge'], judged_event['criterion']
    other_judge = make.judge(event)
    other_criterion = make.criterion(event, name='Design')

    store.submit_score(project.id, judge.id, criterion.id, 5)
    store.submit_score(project.id, judge.id, other_criterion.id, 6)
    store.submit_score(project.id, other_judge.id, criterion.id, 7)

    assert len(storage.get_project_scores_by_project(project.id)) == 3


@pytest.mark.parametrize('value', [0, 11, -3])
def test_out_of_range_score_rejected(store, storage, judged_event, value):
    project, judge, criterion = judged_event['project'], judged_event['judge'], judged_event['criterion']

    with pytest.raises(ValidationError) as exc_info:
        store.submit_score(project.id, judge.id, criterion.id, value)

    assert 'score' in exc_info.value.details
    assert storage.get_project_scores_by_project(project.id) == []


def test_range_bounds_are_inclusive(store, judged_event):
    project, judge, criterion = judged_event['project'], judged_event['judge'], judged_event['criterion']

    assert store.submit_score(project.id, judge.id, criterion.id, 1).entry.score == 1
    assert store.submit_score(project.id, judge.id, criterion.id, 10).entry.score == 10


def test_custom_range(storage, judged_event):
    store = ScoreStore(storage, min_score=0, max_score=5)
    project, judge, criterion = judged_event['project'], judged_event['judge'], judged_event['criterion']

    assert store.submit_score(project.id, judge.id, criterion.id, 0).created
    with pytest.raises(ValidationError):
        store.submit_score(project.id, judge.id, criterion.id, 6)


def test_judge_from_another_event_rejected(store, storage, make, judged_event):
    project, criterion = judged_event['project'], judged_event['criterion']
    outsider = make.judge(make.event(title='Other Hack'))

    with pytest.raises(InvalidAssociation):
        store.submit_score(project.id, outsider.id, criterion.id, 8)

    assert storage.get_project_scores_by_project(project.id) == []


def test_criterion_from_another_event_rejected(store, storage, make, judged_event):
    project, judge = judged_event['project'], judged_event['judge']
    foreign_criterion = make.criterion(make.event(title='Other Hack'))

    with pytest.raises(InvalidAssociation):
        store.submit_score(project.id, judge.id, foreign_criterion.id, 8)

    assert storage.get_project_scores_by_project(project.id) == []


def test_missing_references_raise_not_found(store, judged_event):
    project, judge, criterion = judged_event['project'], judged_event['judge'], judged_event['criterion']

    with pytest.raises(NotFound):
        store.submit_score(9999, judge.id, criterion.id, 5)
    with pytest.raises(NotFound):
        store.submit_score(project.id, 9999, criterion.id, 5)
    with pytest.raises(NotFound):
        store.submit_score(project.id, judge.id, 9999, 5)


def test_lost_insert_race_becomes_overwrite(store, storage, monkeypatch, judged_event):
    project, judge, criterion = judged_event['project'], judged_event['judge'], judged_event['criterion']
    winner = store.submit_score(project.id, judge.id, criterion.id, 4).entry
    winner_id = winner.id

    # Pretend the lookup ran before the other request committed
    real_find = storage.find_project_score
    calls = []

    def stale_find(*args):
        calls.append(args)
        return None if len(calls) == 1 else real_find(*args)

    monkeypatch.setattr(storage, 'find_project_score', stale_find)

    result = store.submit_score(project.id, judge.id, criterion.id, 9)

    assert result.created is False
    assert result.entry.id == winner_id
    assert result.entry.score == 9
    assert len(storage.get_project_scores_by_project(project.id)) == 1


def test_list_scores_for_project_and_judge(store, make, judged_event):
    event, project = judged_event['event'], judged_event['project']
    judge, criterion = judged_event['judge'], judged_event['criterion']
    other_project = make.project(event)

    store.submit_score(project.id, judge.id, criterion.id, 3)
    store.submit_score(other_project.id, judge.id, criterion.id, 4)

    assert [s.score for s in store.list_scores_for_project(project.id)] == [3]
    assert [s.score for s in store.list_scores_for_judge(judge.id)] == [3, 4]

    with pytest.raises(NotFound):
        store.list_scores_for_project(9999)
    with pytest.raises(NotFound):
        store.list_scores_for_judge(9999)


def test_deleting_project_removes_its_scores(store, storage, make, judged_event):
    event, project = judged_event['event'], judged_event['project']
    judge, criterion = judged_event['judge'], judged_event['criterion']
    survivor = make.project(event)
    project_id = project.id

    store.submit_score(project_id, judge.id, criterion.id, 8)
    store.submit_score(survivor.id, judge.id, criterion.id, 5)

    storage.delete_project(project)

    assert storage.get_project(project_id) is None
    assert storage.get_project_scores_by_project(project_id) == []
    assert [s.score for s in storage.get_project_scores_by_judge(judge.id)] == [5]


def test_removing_judge_keeps_scores(store, storage, judged_event):
    project, judge, criterion = judged_event['project'], judged_event['judge'], judged_event['criterion']
    judge_id = judge.id
    store.submit_score(project.id, judge_id, criterion.id, 8)

    storage.remove_judge(judge)

    assert storage.get_judge(judge_id) is None
    assert [s.judge_id for s in storage.get_project_scores_by_project(project.id)] == [judge_id]


def test_new_judge_does_not_take_over_removed_judge_scores(store, storage, make, judged_event):
    event, project = judged_event['event'], judged_event['project']
    judge, criterion = judged_event['judge'], judged_event['criterion']
    old_id = judge.id
    store.submit_score(project.id, old_id, criterion.id, 9, 'old judge')

    storage.remove_judge(judge)
    newcomer = make.judge(event)

    assert newcomer.id != old_id
    assert store.list_scores_for_judge(newcomer.id) == []

    result = store.submit_score(project.id, newcomer.id, criterion.id, 3)
    assert result.created is True
    kept = [(s.judge_id, s.score, s.comment) for s in storage.get_project_scores_by_project(project.id)]
    assert kept == [(old_id, 9, 'old judge'), (newcomer.id, 3, None)]


def test_user_judges_an_event_at_most_once(storage, make, judged_event):
    event = judged_event['event']
    user = make.user()
    make.judge(event, user=user)

    with pytest.raises(Conflict):
        make.judge(event, user=user)

    # The same user may still judge a different event
    other_event = make.event(title='Other Hack')
    assert make.judge(other_event, user=user).event_id == other_event.id
    assert [j.user_id for j in storage.get_judges_by_event(event.id)].count(user.id) == 1


def test_missing_project_reported_before_score_range(store, judged_event):
    judge, criterion = judged_event['judge'], judged_event['criterion']

    with pytest.raises(NotFound):
        store.submit_score(9999, judge.id, criterion.id, 11)

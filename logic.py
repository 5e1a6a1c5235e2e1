# logic.py
# Judging aggregates. Everything here only reads through a Storage instance.

from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP
from itertools import product

from storage import require


def _mean(values):
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


def round_for_display(value, places=1):
    """Round half-up for display (8.25 -> 8.3). None passes through."""
    if value is None:
        return None
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def average_score(storage, project_id):
    """
    Flat mean of every score value on the project, across all judges and
    criteria. Returns None while the project has not been scored at all.
    """
    require(storage.get_project(project_id), 'Project')
    return _mean(s.score for s in storage.get_project_scores_by_project(project_id))


def per_criterion_average(storage, project_id, criterion_id):
    require(storage.get_project(project_id), 'Project')
    return _mean(
        s.score for s in storage.get_project_scores_by_project(project_id)
        if s.criterion_id == criterion_id
    )


def _weighted_mean(scores, criteria):
    by_criterion = defaultdict(list)
    for s in scores:
        by_criterion[s.criterion_id].append(s.score)

    total = 0
    total_weight = 0
    for c in criteria:
        if c.id in by_criterion:
            total += c.weight * _mean(by_criterion[c.id])
            total_weight += c.weight
    if not total_weight:
        return None
    return total / total_weight


def weighted_average_score(storage, project_id):
    """Mean of per-criterion means, weighted by each criterion's weight."""
    project = require(storage.get_project(project_id), 'Project')
    return _weighted_mean(
        storage.get_project_scores_by_project(project_id),
        storage.get_judging_criteria_by_event(project.event_id),
    )


def _fully_judged_ids(scores, judges, criteria):
    # Projects where every assigned judge has scored every criterion
    if not judges or not criteria:
        return set()
    required = {(j.id, c.id) for j, c in product(judges, criteria)}
    scored = defaultdict(set)
    for s in scores:
        scored[s.project_id].add((s.judge_id, s.criterion_id))
    return {project_id for project_id, pairs in scored.items() if pairs >= required}


def is_fully_judged(storage, project):
    return project.id in _fully_judged_ids(
        storage.get_project_scores_by_project(project.id),
        storage.get_judges_by_event(project.event_id),
        storage.get_judging_criteria_by_event(project.event_id),
    )


def _event_scores(storage, event_id):
    require(storage.get_event(event_id), 'Event')
    project_ids = {p.id for p in storage.get_projects_by_event(event_id)}
    scores = storage.get_project_scores_by_event(event_id)
    touched = {s.project_id for s in scores} & project_ids
    return project_ids, scores, touched


def judging_completion_ratio(storage, event_id):
    """
    Share of the event's projects that have at least one score from any judge.
    An event without projects reports 0.0.
    """
    project_ids, _, touched = _event_scores(storage, event_id)
    if not project_ids:
        return 0.0
    return len(touched) / len(project_ids)


def judging_progress(storage, event_id):
    project_ids, scores, touched = _event_scores(storage, event_id)
    fully_judged = _fully_judged_ids(
        scores,
        storage.get_judges_by_event(event_id),
        storage.get_judging_criteria_by_event(event_id),
    ) & project_ids

    total = len(project_ids)
    return {
        'event_id': event_id,
        'total_projects': total,
        'judged_projects': len(touched),
        'fully_judged_projects': len(fully_judged),
        'completion_ratio': judging_completion_ratio(storage, event_id),
    }


def judge_progress(storage, judge_id):
    """
    How far one judge is through their event: entries scored against
    projects x criteria, and which projects they have scored on every criterion.
    """
    judge = require(storage.get_judge(judge_id), 'Judge')
    project_ids = [p.id for p in storage.get_projects_by_event(judge.event_id)]
    criterion_ids = {c.id for c in storage.get_judging_criteria_by_event(judge.event_id)}

    scored = defaultdict(set)
    for s in storage.get_project_scores_by_judge(judge_id):
        if s.criterion_id in criterion_ids:
            scored[s.project_id].add(s.criterion_id)

    completed = [pid for pid in project_ids if criterion_ids and scored[pid] >= criterion_ids]
    pending = [pid for pid in project_ids if pid not in completed]
    expected = len(project_ids) * len(criterion_ids)
    entered = sum(len(scored[pid]) for pid in project_ids)

    return {
        'judge_id': judge.id,
        'event_id': judge.event_id,
        'scores_entered': entered,
        'scores_expected': expected,
        'completion_ratio': entered / expected if expected else 0.0,
        'completed_project_ids': completed,
        'pending_project_ids': pending,
    }


def project_summary(storage, project_id):
    project = require(storage.get_project(project_id), 'Project')
    scores = storage.get_project_scores_by_project(project_id)
    criteria = storage.get_judging_criteria_by_event(project.event_id)

    average = average_score(storage, project_id)
    weighted = _weighted_mean(scores, criteria)

    breakdown = []
    for c in criteria:
        criterion_average = per_criterion_average(storage, project_id, c.id)
        breakdown.append({
            'criterion_id': c.id,
            'name': c.name,
            'weight': c.weight,
            'score_count': sum(1 for s in scores if s.criterion_id == c.id),
            'average_score': criterion_average,
            'average_score_display': round_for_display(criterion_average),
        })

    return {
        'project_id': project.id,
        'event_id': project.event_id,
        'score_count': len(scores),
        'judge_ids': sorted({s.judge_id for s in scores}),
        'judged': bool(scores),
        'average_score': average,
        'average_score_display': round_for_display(average),
        'weighted_average_score': weighted,
        'weighted_average_score_display': round_for_display(weighted),
        'fully_judged': is_fully_judged(storage, project),
        'criteria': breakdown,
    }


def event_results(storage, event_id):
    """
    Projects ranked by flat average, best first. Equal averages share a rank;
    unscored projects come last without a rank.
    """
    require(storage.get_event(event_id), 'Event')
    score_counts = defaultdict(int)
    for s in storage.get_project_scores_by_event(event_id):
        score_counts[s.project_id] += 1

    rows = []
    for p in storage.get_projects_by_event(event_id):
        average = average_score(storage, p.id)
        rows.append({
            'project_id': p.id,
            'name': p.name,
            'team_id': p.team_id,
            'status': p.status,
            'score_count': score_counts[p.id],
            'average_score': average,
            'average_score_display': round_for_display(average),
        })
    rows.sort(key=lambda r: (r['average_score'] is None, -(r['average_score'] or 0), r['project_id']))

    previous = None
    rank = None
    for position, row in enumerate(rows, start=1):
        if row['average_score'] is None:
            row['rank'] = None
            continue
        if row['average_score'] != previous:
            rank = position
            previous = row['average_score']
        row['rank'] = rank
    return rows

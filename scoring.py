# scoring.py
# Judge score entries: one row per (project, judge, criterion), upserted

import logging
from collections import namedtuple

from flask import current_app

from errors import Conflict, InvalidAssociation, ValidationError
from schemas import ScorePatch
from storage import get_storage, require

logger = logging.getLogger(__name__)

ScoreResult = namedtuple('ScoreResult', ['entry', 'created'])


def get_score_store():
    return ScoreStore(
        get_storage(),
        min_score=current_app.config['SCORE_MIN'],
        max_score=current_app.config['SCORE_MAX'],
    )


class ScoreStore:
    def __init__(self, storage, min_score=1, max_score=10):
        self.storage = storage
        self.min_score = min_score
        self.max_score = max_score

    def submit_score(self, project_id, judge_id, criterion_id, score, comment=None):
        """
        Create or overwrite the score a judge gave a project on one criterion.

        A resubmission replaces score and comment of the existing entry in place,
        keeping its id and created_at. Returns ScoreResult(entry, created), where
        created is False for an overwrite.
        """
        project = require(self.storage.get_project(project_id), 'Project')
        if not self.min_score <= score <= self.max_score:
            raise ValidationError(
                'Invalid score data',
                details={'score': f'Score must be between {self.min_score} and {self.max_score}'}
            )

        judge = require(self.storage.get_judge(judge_id), 'Judge')
        if judge.event_id != project.event_id:
            raise InvalidAssociation('Judge is not assigned to this event')
        criterion = require(self.storage.get_judging_criterion(criterion_id), 'Criterion')
        if criterion.event_id != project.event_id:
            raise InvalidAssociation('Criterion is not for this event')

        patch = ScorePatch(score=score, comment=comment)
        existing = self.storage.find_project_score(project_id, judge_id, criterion_id)
        if existing is not None:
            return ScoreResult(self._overwrite(existing, patch), False)

        try:
            entry = self.storage.add_project_score(project_id, judge_id, criterion_id, score, comment)
        except Conflict:
            # A concurrent request inserted the same triple first; the unique
            # index kept it single, so overwrite the winner instead.
            existing = self.storage.find_project_score(project_id, judge_id, criterion_id)
            if existing is None:
                raise
            return ScoreResult(self._overwrite(existing, patch), False)

        logger.info(
            f"Score {entry.id} created: project={project_id} judge={judge_id} "
            f"criterion={criterion_id} score={score}"
        )
        return ScoreResult(entry, True)

    def _overwrite(self, entry, patch):
        entry_id, previous = entry.id, entry.score
        entry = self.storage.update_project_score(entry_id, patch)
        logger.info(f"Score {entry_id} updated: {previous} -> {entry.score}")
        return entry

    def list_scores_for_project(self, project_id):
        require(self.storage.get_project(project_id), 'Project')
        return self.storage.get_project_scores_by_project(project_id)

    def list_scores_for_judge(self, judge_id):
        require(self.storage.get_judge(judge_id), 'Judge')
        return self.storage.get_project_scores_by_judge(judge_id)

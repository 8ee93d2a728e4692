"""Questionnaire engine: catalog, answers, flow, evaluation, dispatch, submission."""

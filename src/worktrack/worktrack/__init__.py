"""worktrack package.

Feature modules (submissions, assignments, staff, work_calendar) sit on top of
a REST API client, with a thin Flask controller layer and service/repository
layers in between.
"""

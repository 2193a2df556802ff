"""Work Reports package.

Admins manage projects and users and assign users to projects; users submit
daily work reports against their assignments. Organized by feature modules
(users, projects, assignments, reports) with a thin Flask controller layer
over service/repository layers.
"""

from repogen.build.project import build_and_load, resolve_project, read_project, ProjectInfo

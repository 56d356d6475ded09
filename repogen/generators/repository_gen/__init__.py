from repogen.generators.repository_gen.generator import generate_repositories, render_repository_files

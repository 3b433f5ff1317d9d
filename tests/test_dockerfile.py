import logging

from dist_docker.dockerfile import coverage_dockerfile, resolve_dockerfile


def test_suffixed_dockerfile_is_preferred(tmp_path):
    (tmp_path / "Dockerfile").write_text("FROM scratch\n")
    (tmp_path / "Dockerfile.arm").write_text("FROM scratch\n")

    assert resolve_dockerfile(tmp_path, ".arm") == tmp_path / "Dockerfile.arm"


def test_missing_suffix_falls_back_to_default(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="dist_docker.dockerfile")
    (tmp_path / "Dockerfile").write_text("FROM scratch\n")

    assert resolve_dockerfile(tmp_path, ".arm") == tmp_path / "Dockerfile"
    assert (
        f"Using default Dockerfile since '{tmp_path / 'Dockerfile.arm'}' does not exist"
        in caplog.messages
    )


def test_no_suffix(tmp_path):
    (tmp_path / "Dockerfile").write_text("FROM scratch\n")
    assert resolve_dockerfile(tmp_path) == tmp_path / "Dockerfile"


def test_coverage_dockerfile(tmp_path):
    assert coverage_dockerfile(tmp_path) == tmp_path / "Dockerfile.cov"

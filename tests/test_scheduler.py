import json

from documcp.scheduler import Scheduler

SEED = "https://example.com/"
PAGES = {
    SEED: "<html><body><p>Home</p><a href='/next'>Next</a></body></html>",
    "https://example.com/next": "<html><body><p>Next page</p></body></html>",
}


def fake_fetch(url):
    if url in PAGES:
        return 200, PAGES[url].encode("utf-8")
    return 404, b""


def test_job_records_parameters(tmp_path):
    scheduler = Scheduler(tmp_path, fetch=fake_fetch)
    job, _ = scheduler.start_crawl_job(SEED, 3, 7, 2)
    assert job.seed_url == SEED
    assert (job.max_depth, job.max_pages, job.concurrency) == (3, 7, 2)


def test_job_directory_is_under_processes(tmp_path):
    scheduler = Scheduler(tmp_path, fetch=fake_fetch)
    job, _ = scheduler.start_crawl_job(SEED, 1, 5, 1)
    assert job.process_dir.parent == tmp_path / "processes"
    assert job.process_id == job.process_dir.name
    assert job.process_dir.is_dir()


def test_job_returns_and_saves_results(tmp_path):
    scheduler = Scheduler(tmp_path, fetch=fake_fetch)
    job, results = scheduler.start_crawl_job(SEED, 1, 5, 2)
    assert {r.url for r in results} == set(PAGES)
    saved = json.loads((job.process_dir / "results.json").read_text(encoding="utf-8"))
    assert sorted(item["URL"] for item in saved) == sorted(PAGES)


def test_separate_jobs_get_separate_directories(tmp_path):
    scheduler = Scheduler(tmp_path, fetch=fake_fetch)
    first, _ = scheduler.start_crawl_job(SEED, 0, 5, 1)
    second, _ = scheduler.start_crawl_job(SEED, 0, 5, 1)
    assert first.process_dir.parent == second.process_dir.parent
    assert (first.process_dir / "results.json").exists()
    assert (second.process_dir / "results.json").exists()
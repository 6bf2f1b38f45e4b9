from recoverystats.config import Settings
from recoverystats.data_loader import WorkoutHistoryLoader
from recoverystats.log import setup_logging
from recoverystats.recovery import estimate_recovery

def verify():
    settings = Settings.from_env()
    setup_logging(settings.log_format, settings.log_level)

    print("Initializing WorkoutHistoryLoader...")
    loader = WorkoutHistoryLoader(settings.data_dir)

    print("Loading data...")
    try:
        history = loader.load_all()
    except (FileNotFoundError, ValueError) as e:
        print(f"FAILED to load data: {e}")
        return

    if not history:
        print("FAILED: No performance entries loaded!")
        return

    print("\n--- Data Summary ---")
    print(f"Total Entries: {len(history)}")
    untargeted = sorted({e.exercise_name for e in history if not e.target_muscle})
    if untargeted:
        print(f"WARNING: {len(untargeted)} exercises have no target muscle.")
        print(f"Sample: {untargeted[:5]}")
    else:
        print("SUCCESS: All exercises mapped to a target muscle.")

    print("\n--- Recovery ---")
    report = estimate_recovery(history)
    for status in report.muscle_status.values():
        hours = "never" if status.last_trained is None else f"{status.hours_since:.1f} h"
        print(f"  {status.name:<11} {status.recovery_percentage:>3}%  {status.status:<10} ({hours})")

    print(f"\nGlobal Readiness: {report.global_readiness}%")
    print(f"Not Ready: {report.fatigued_count}")
    print(f"Recommendation: {report.recommendation}")

    assert 0 <= report.global_readiness <= 100, "Readiness out of range!"
    print("  [OK]")

if __name__ == "__main__":
    verify()

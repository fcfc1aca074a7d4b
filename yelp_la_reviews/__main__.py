from .pipeline import run_pipeline

if __name__ == "__main__":
    run_pipeline()

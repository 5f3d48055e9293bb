from minilisp.evaluation.evaluator import evaluate, evaluate0

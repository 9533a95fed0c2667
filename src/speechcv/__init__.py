"""
Classification of speech paragraphs into domestic vs foreign affairs.

Key modules:
- core.folds: round-robin (and stratified) fold assignment
- core.metrics: accuracy/precision/recall/specificity/F for a positive class
- core.cross_validation: k-fold cross-validation averaged over folds
- models: liblinear classifier backends behind a train/predict contract
- features: CSV loading and document-term matrices
- experiments.hyperparameter_tuning: grid search over the cost C
- experiments.pipeline: end-to-end run and CLI
"""

__version__ = "0.1.0"

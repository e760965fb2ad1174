### ~~~
## ~~~ Everything that can go wrong in a run of the pipeline (all of it is fatal; nothing here is retried)
### ~~~


class MpgNetError(Exception):
    pass


#
# ~~~ The remote data source was unreachable or answered with a non-success status
class FetchError(MpgNetError):
    pass


#
# ~~~ The payload was not valid json, or not shaped like a list of car records
class ParseError(MpgNetError):
    pass


#
# ~~~ No usable records were left after filtering
class EmptyDatasetError(MpgNetError):
    pass


#
# ~~~ The training loss stopped being a finite number
class TrainingDivergenceError(MpgNetError):
    def __init__(self, epoch, loss):
        super().__init__(f"Training diverged at epoch {epoch} (loss={loss})")
        self.epoch = epoch
        self.loss = loss

from .config import GenerationType, GeneratorArgs
from .delegated import DelegatedStakingGenerator
from .direct import DirectStakingGenerator
from .errors import UnknownGenerationTypeError
from .mixed import MixedStakingGenerator

_GENERATORS = {
    GenerationType.DIRECT: DirectStakingGenerator,
    GenerationType.DELEGATED: DelegatedStakingGenerator,
    GenerationType.MIXED: MixedStakingGenerator,
}


def create_data_generator(args: GeneratorArgs):
    """Build the strategy named by `args.generation_type`."""
    try:
        generation_type = GenerationType(args.generation_type)
    except ValueError:
        raise UnknownGenerationTypeError(args.generation_type) from None

    return _GENERATORS[generation_type](args)

"""Version model for the package file summary.

Three independent version sequences govern the layout of a package:

* the legacy file version, a small negative tag that changes only when the
  container itself is restructured (more negative is newer);
* the object version, the engine-wide serialization version;
* custom versions, one integer per subsystem keyed by a GUID.

Every version-gated field is one row of ``FIELD_GATES``. Supporting a new
engine release means adding enum members here, adding rows to that table and
teaching the parser the new reads. Nothing else changes.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Dict, Iterable, List, Optional, Tuple, Type
from uuid import UUID

from .errors import malformed, unsupported_version

__all__ = [
    "Namespace",
    "LegacyFileVersion",
    "ObjectVersion",
    "CoreObjectVersion",
    "EditorObjectVersion",
    "FrameworkObjectVersion",
    "CustomVersionSubsystem",
    "CUSTOM_VERSION_SUBSYSTEMS",
    "CustomVersionEntry",
    "FileVersions",
    "FieldGate",
    "FIELD_GATES",
    "ENGINE_RELEASES",
    "resolve",
    "resolve_custom",
    "subsystem_for",
    "threshold",
    "gate_for",
    "evaluate",
    "iter_gates",
    "is_present",
    "custom_version_of",
]


class Namespace(str, Enum):
    LEGACY = "legacy"
    OBJECT = "object"
    CUSTOM = "custom"


class LegacyFileVersion(IntEnum):
    """Container revisions this parser understands."""

    OPTIMIZED_CUSTOM_VERSIONS = -6
    REMOVED_TEXTURE_ALLOCATION_INFO = -7


class ObjectVersion(IntEnum):
    """Engine object versions, one member per integer from the oldest
    loadable package up to the newest version this parser knows about."""

    VER_UE4_OLDEST_LOADABLE_PACKAGE = 214
    VER_UE4_BLUEPRINT_VARS_NOT_READ_ONLY = auto()
    VER_UE4_STATIC_MESH_STORE_NAV_COLLISION = auto()
    VER_UE4_ATMOSPHERIC_FOG_DECAY_NAME_CHANGE = auto()
    VER_UE4_SCENECOMP_TRANSLATION_TO_LOCATION = auto()
    VER_UE4_MATERIAL_ATTRIBUTES_REORDERING = auto()
    VER_UE4_COLLISION_PROFILE_SETTING = auto()
    VER_UE4_BLUEPRINT_SKEL_TEMPORARY_TRANSIENT = auto()
    VER_UE4_BLUEPRINT_SKEL_SERIALIZED_AGAIN = auto()
    VER_UE4_BLUEPRINT_SETS_REPLICATION = auto()
    VER_UE4_WORLD_LEVEL_INFO = auto()
    VER_UE4_AFTER_CAPSULE_HALF_HEIGHT_CHANGE = auto()
    VER_UE4_ADDED_NAMESPACE_AND_KEY_DATA_TO_FTEXT = auto()
    VER_UE4_ATTENUATION_SHAPES = auto()
    VER_UE4_LIGHTCOMPONENT_USE_IES_TEXTURE_MULTIPLIER_ON_NON_IES_BRIGHTNESS = auto()
    VER_UE4_REMOVE_INPUT_COMPONENTS_FROM_BLUEPRINTS = auto()
    VER_UE4_VARK2NODE_USE_MEMBERREFSTRUCT = auto()
    VER_UE4_REFACTOR_MATERIAL_EXPRESSION_SCENECOLOR_AND_SCENEDEPTH_INPUTS = auto()
    VER_UE4_SPLINE_MESH_ORIENTATION = auto()
    VER_UE4_REVERB_EFFECT_ASSET_TYPE = auto()
    VER_UE4_MAX_TEXCOORD_INCREASED = auto()
    VER_UE4_SPEEDTREE_STATICMESH = auto()
    VER_UE4_LANDSCAPE_COMPONENT_LAZY_REFERENCES = auto()
    VER_UE4_SWITCH_CALL_NODE_TO_USE_MEMBER_REFERENCE = auto()
    VER_UE4_ADDED_SKELETON_ARCHIVER_REMOVAL = auto()
    VER_UE4_ADDED_SKELETON_ARCHIVER_REMOVAL_SECOND_TIME = auto()
    VER_UE4_BLUEPRINT_SKEL_CLASS_TRANSIENT_AGAIN = auto()
    VER_UE4_ADD_COOKED_TO_UCLASS = auto()
    VER_UE4_DEPRECATED_STATIC_MESH_THUMBNAIL_PROPERTIES_REMOVED = auto()
    VER_UE4_COLLECTIONS_IN_SHADERMAPID = auto()
    VER_UE4_REFACTOR_MOVEMENT_COMPONENT_HIERARCHY = auto()
    VER_UE4_FIX_TERRAIN_LAYER_SWITCH_ORDER = auto()
    VER_UE4_ALL_PROPS_TO_CONSTRAINTINSTANCE = auto()
    VER_UE4_LOW_QUALITY_DIRECTIONAL_LIGHTMAPS = auto()
    VER_UE4_ADDED_NOISE_EMITTER_COMPONENT = auto()
    VER_UE4_ADD_TEXT_COMPONENT_VERTICAL_ALIGNMENT = auto()
    VER_UE4_ADDED_FBX_ASSET_IMPORT_DATA = auto()
    VER_UE4_REMOVE_LEVELBODYSETUP = auto()
    VER_UE4_REFACTOR_CHARACTER_CROUCH = auto()
    VER_UE4_SMALLER_DEBUG_MATERIALSHADER_UNIFORM_EXPRESSIONS = auto()
    VER_UE4_APEX_CLOTH = auto()
    VER_UE4_SAVE_COLLISIONRESPONSE_PER_CHANNEL = auto()
    VER_UE4_ADDED_LANDSCAPE_SPLINE_EDITOR_MESH = auto()
    VER_UE4_CHANGED_MATERIAL_REFACTION_TYPE = auto()
    VER_UE4_REFACTOR_PROJECTILE_MOVEMENT = auto()
    VER_UE4_REMOVE_PHYSICALMATERIALPROPERTY = auto()
    VER_UE4_PURGED_FMATERIAL_COMPILE_OUTPUTS = auto()
    VER_UE4_ADD_COOKED_TO_LANDSCAPE = auto()
    VER_UE4_CONSUME_INPUT_PER_BIND = auto()
    VER_UE4_SOUND_CLASS_GRAPH_EDITOR = auto()
    VER_UE4_FIXUP_TERRAIN_LAYER_NODES = auto()
    VER_UE4_RETROFIT_CLAMP_EXPRESSIONS_SWAP = auto()
    VER_UE4_REMOVE_LIGHT_MOBILITY_CLASSES = auto()
    VER_UE4_REFACTOR_PHYSICS_BLENDING = auto()
    VER_UE4_WORLD_LEVEL_INFO_UPDATED = auto()
    VER_UE4_STATIC_SKELETAL_MESH_SERIALIZATION_FIX = auto()
    VER_UE4_REMOVE_STATICMESH_MOBILITY_CLASSES = auto()
    VER_UE4_REFACTOR_PHYSICS_TRANSFORMS = auto()
    VER_UE4_REMOVE_ZERO_TRIANGLE_SECTIONS = auto()
    VER_UE4_CHARACTER_MOVEMENT_DECELERATION = auto()
    VER_UE4_CAMERA_ACTOR_USING_CAMERA_COMPONENT = auto()
    VER_UE4_CHARACTER_MOVEMENT_DEPRECATE_PITCH_ROLL = auto()
    VER_UE4_REBUILD_TEXTURE_STREAMING_DATA_ON_LOAD = auto()
    VER_UE4_SUPPORT_32BIT_STATIC_MESH_INDICES = auto()
    VER_UE4_ADDED_CHUNKID_TO_ASSETDATA_AND_UPACKAGE = auto()
    VER_UE4_CHARACTER_DEFAULT_MOVEMENT_BINDINGS = auto()
    VER_UE4_APEX_CLOTH_LOD = auto()
    VER_UE4_ATMOSPHERIC_FOG_CACHE_DATA = auto()
    VAR_UE4_ARRAY_PROPERTY_INNER_TAGS = auto()
    VER_UE4_KEEP_SKEL_MESH_INDEX_DATA = auto()
    VER_UE4_BODYSETUP_COLLISION_CONVERSION = auto()
    VER_UE4_REFLECTION_CAPTURE_COOKING = auto()
    VER_UE4_REMOVE_DYNAMIC_VOLUME_CLASSES = auto()
    VER_UE4_STORE_HASCOOKEDDATA_FOR_BODYSETUP = auto()
    VER_UE4_REFRACTION_BIAS_TO_REFRACTION_DEPTH_BIAS = auto()
    VER_UE4_REMOVE_SKELETALPHYSICSACTOR = auto()
    VER_UE4_PC_ROTATION_INPUT_REFACTOR = auto()
    VER_UE4_LANDSCAPE_PLATFORMDATA_COOKING = auto()
    VER_UE4_CREATEEXPORTS_CLASS_LINKING_FOR_BLUEPRINTS = auto()
    VER_UE4_REMOVE_NATIVE_COMPONENTS_FROM_BLUEPRINT_SCS = auto()
    VER_UE4_REMOVE_SINGLENODEINSTANCE = auto()
    VER_UE4_CHARACTER_BRAKING_REFACTOR = auto()
    VER_UE4_VOLUME_SAMPLE_LOW_QUALITY_SUPPORT = auto()
    VER_UE4_SPLIT_TOUCH_AND_CLICK_ENABLES = auto()
    VER_UE4_HEALTH_DEATH_REFACTOR = auto()
    VER_UE4_SOUND_NODE_ENVELOPER_CURVE_CHANGE = auto()
    VER_UE4_POINT_LIGHT_SOURCE_RADIUS = auto()
    VER_UE4_SCENE_CAPTURE_CAMERA_CHANGE = auto()
    VER_UE4_MOVE_SKELETALMESH_SHADOWCASTING = auto()
    VER_UE4_CHANGE_SETARRAY_BYTECODE = auto()
    VER_UE4_MATERIAL_INSTANCE_BASE_PROPERTY_OVERRIDES = auto()
    VER_UE4_COMBINED_LIGHTMAP_TEXTURES = auto()
    VER_UE4_BUMPED_MATERIAL_EXPORT_GUIDS = auto()
    VER_UE4_BLUEPRINT_INPUT_BINDING_OVERRIDES = auto()
    VER_UE4_FIXUP_BODYSETUP_INVALID_CONVEX_TRANSFORM = auto()
    VER_UE4_FIXUP_STIFFNESS_AND_DAMPING_SCALE = auto()
    VER_UE4_REFERENCE_SKELETON_REFACTOR = auto()
    VER_UE4_K2NODE_REFERENCEGUIDS = auto()
    VER_UE4_FIXUP_ROOTBONE_PARENT = auto()
    VER_UE4_TEXT_RENDER_COMPONENTS_WORLD_SPACE_SIZING = auto()
    VER_UE4_MATERIAL_INSTANCE_BASE_PROPERTY_OVERRIDES_PHASE_2 = auto()
    VER_UE4_CLASS_NOTPLACEABLE_ADDED = auto()
    VER_UE4_WORLD_LEVEL_INFO_LOD_LIST = auto()
    VER_UE4_CHARACTER_MOVEMENT_VARIABLE_RENAMING_1 = auto()
    VER_UE4_FSLATESOUND_CONVERSION = auto()
    VER_UE4_WORLD_LEVEL_INFO_ZORDER = auto()
    VER_UE4_PACKAGE_REQUIRES_LOCALIZATION_GATHER_FLAGGING = auto()
    VER_UE4_BP_ACTOR_VARIABLE_DEFAULT_PREVENTING = auto()
    VER_UE4_TEST_ANIMCOMP_CHANGE = auto()
    VER_UE4_EDITORONLY_BLUEPRINTS = auto()
    VER_UE4_EDGRAPHPINTYPE_SERIALIZATION = auto()
    VER_UE4_NO_MIRROR_BRUSH_MODEL_COLLISION = auto()
    VER_UE4_CHANGED_CHUNKID_TO_BE_AN_ARRAY_OF_CHUNKIDS = auto()
    VER_UE4_WORLD_NAMED_AFTER_PACKAGE = auto()
    VER_UE4_SKY_LIGHT_COMPONENT = auto()
    VER_UE4_WORLD_LAYER_ENABLE_DISTANCE_STREAMING = auto()
    VER_UE4_REMOVE_ZONES_FROM_MODEL = auto()
    VER_UE4_FIX_ANIMATIONBASEPOSE_SERIALIZATION = auto()
    VER_UE4_SUPPORT_8_BONE_INFLUENCES_SKELETAL_MESHES = auto()
    VER_UE4_ADD_OVERRIDE_GRAVITY_FLAG = auto()
    VER_UE4_SUPPORT_GPUSKINNING_8_BONE_INFLUENCES = auto()
    VER_UE4_ANIM_SUPPORT_NONUNIFORM_SCALE_ANIMATION = auto()
    VER_UE4_ENGINE_VERSION_OBJECT = auto()
    VER_UE4_PUBLIC_WORLDS = auto()
    VER_UE4_SKELETON_GUID_SERIALIZATION = auto()
    VER_UE4_CHARACTER_MOVEMENT_WALKABLE_FLOOR_REFACTOR = auto()
    VER_UE4_INVERSE_SQUARED_LIGHTS_DEFAULT = auto()
    VER_UE4_DISABLED_SCRIPT_LIMIT_BYTECODE = auto()
    VER_UE4_PRIVATE_REMOTE_ROLE = auto()
    VER_UE4_FOLIAGE_STATIC_MOBILITY = auto()
    VER_UE4_BUILD_SCALE_VECTOR = auto()
    VER_UE4_FOLIAGE_COLLISION = auto()
    VER_UE4_SKY_BENT_NORMAL = auto()
    VER_UE4_LANDSCAPE_COLLISION_DATA_COOKING = auto()
    VER_UE4_MORPHTARGET_CPU_TANGENTZDELTA_FORMATCHANGE = auto()
    VER_UE4_SOFT_CONSTRAINTS_USE_MASS = auto()
    VER_UE4_REFLECTION_DATA_IN_PACKAGES = auto()
    VER_UE4_FOLIAGE_MOVABLE_MOBILITY = auto()
    VER_UE4_UNDO_BREAK_MATERIALATTRIBUTES_CHANGE = auto()
    VER_UE4_ADD_CUSTOMPROFILENAME_CHANGE = auto()
    VER_UE4_FLIP_MATERIAL_COORDS = auto()
    VER_UE4_MEMBERREFERENCE_IN_PINTYPE = auto()
    VER_UE4_VEHICLES_UNIT_CHANGE = auto()
    VER_UE4_ANIMATION_REMOVE_NANS = auto()
    VER_UE4_SKELETON_ASSET_PROPERTY_TYPE_CHANGE = auto()
    VER_UE4_FIX_BLUEPRINT_VARIABLE_FLAGS = auto()
    VER_UE4_VEHICLES_UNIT_CHANGE2 = auto()
    VER_UE4_UCLASS_SERIALIZE_INTERFACES_AFTER_LINKING = auto()
    VER_UE4_STATIC_MESH_SCREEN_SIZE_LODS = auto()
    VER_UE4_FIX_MATERIAL_COORDS = auto()
    VER_UE4_SPEEDTREE_WIND_V7 = auto()
    VER_UE4_LOAD_FOR_EDITOR_GAME = auto()
    VER_UE4_SERIALIZE_RICH_CURVE_KEY = auto()
    VER_UE4_MOVE_LANDSCAPE_MICS_AND_TEXTURES_WITHIN_LEVEL = auto()
    VER_UE4_FTEXT_HISTORY = auto()
    VER_UE4_FIX_MATERIAL_COMMENTS = auto()
    VER_UE4_STORE_BONE_EXPORT_NAMES = auto()
    VER_UE4_MESH_EMITTER_INITIAL_ORIENTATION_DISTRIBUTION = auto()
    VER_UE4_DISALLOW_FOLIAGE_ON_BLUEPRINTS = auto()
    VER_UE4_FIXUP_MOTOR_UNITS = auto()
    VER_UE4_DEPRECATED_MOVEMENTCOMPONENT_MODIFIED_SPEEDS = auto()
    VER_UE4_RENAME_CANBECHARACTERBASE = auto()
    VER_UE4_GAMEPLAY_TAG_CONTAINER_TAG_TYPE_CHANGE = auto()
    VER_UE4_FOLIAGE_SETTINGS_TYPE = auto()
    VER_UE4_STATIC_SHADOW_DEPTH_MAPS = auto()
    VER_UE4_ADD_TRANSACTIONAL_TO_DATA_ASSETS = auto()
    VER_UE4_ADD_LB_WEIGHTBLEND = auto()
    VER_UE4_ADD_ROOTCOMPONENT_TO_FOLIAGEACTOR = auto()
    VER_UE4_FIX_MATERIAL_PROPERTY_OVERRIDE_SERIALIZE = auto()
    VER_UE4_ADD_LINEAR_COLOR_SAMPLER = auto()
    VER_UE4_ADD_STRING_ASSET_REFERENCES_MAP = auto()
    VER_UE4_BLUEPRINT_USE_SCS_ROOTCOMPONENT_SCALE = auto()
    VER_UE4_LEVEL_STREAMING_DRAW_COLOR_TYPE_CHANGE = auto()
    VER_UE4_CLEAR_NOTIFY_TRIGGERS = auto()
    VER_UE4_SKELETON_ADD_SMARTNAMES = auto()
    VER_UE4_ADDED_CURRENCY_CODE_TO_FTEXT = auto()
    VER_UE4_ENUM_CLASS_SUPPORT = auto()
    VER_UE4_FIXUP_WIDGET_ANIMATION_CLASS = auto()
    VER_UE4_SOUND_COMPRESSION_TYPE_ADDED = auto()
    VER_UE4_AUTO_WELDING = auto()
    VER_UE4_RENAME_CROUCHMOVESCHARACTERDOWN = auto()
    VER_UE4_LIGHTMAP_MESH_BUILD_SETTINGS = auto()
    VER_UE4_RENAME_SM3_TO_ES3_1 = auto()
    VER_UE4_DEPRECATE_UMG_STYLE_ASSETS = auto()
    VER_UE4_POST_DUPLICATE_NODE_GUID = auto()
    VER_UE4_RENAME_CAMERA_COMPONENT_VIEW_ROTATION = auto()
    VER_UE4_CASE_PRESERVING_FNAME = auto()
    VER_UE4_RENAME_CAMERA_COMPONENT_CONTROL_ROTATION = auto()
    VER_UE4_FIX_REFRACTION_INPUT_MASKING = auto()
    VER_UE4_GLOBAL_EMITTER_SPAWN_RATE_SCALE = auto()
    VER_UE4_CLEAN_DESTRUCTIBLE_SETTINGS = auto()
    VER_UE4_CHARACTER_MOVEMENT_UPPER_IMPACT_BEHAVIOR = auto()
    VER_UE4_BP_MATH_VECTOR_EQUALITY_USES_EPSILON = auto()
    VER_UE4_FOLIAGE_STATIC_LIGHTING_SUPPORT = auto()
    VER_UE4_SLATE_COMPOSITE_FONTS = auto()
    VER_UE4_REMOVE_SAVEGAMESUMMARY = auto()
    VER_UE4_REMOVE_SKELETALMESH_COMPONENT_BODYSETUP_SERIALIZATION = auto()
    VER_UE4_SLATE_BULK_FONT_DATA = auto()
    VER_UE4_ADD_PROJECTILE_FRICTION_BEHAVIOR = auto()
    VER_UE4_MOVEMENTCOMPONENT_AXIS_SETTINGS = auto()
    VER_UE4_GRAPH_INTERACTIVE_COMMENTBUBBLES = auto()
    VER_UE4_LANDSCAPE_SERIALIZE_PHYSICS_MATERIALS = auto()
    VER_UE4_RENAME_WIDGET_VISIBILITY = auto()
    VER_UE4_ANIMATION_ADD_TRACKCURVES = auto()
    VER_UE4_MONTAGE_BRANCHING_POINT_REMOVAL = auto()
    VER_UE4_BLUEPRINT_ENFORCE_CONST_IN_FUNCTION_OVERRIDES = auto()
    VER_UE4_ADD_PIVOT_TO_WIDGET_COMPONENT = auto()
    VER_UE4_PAWN_AUTO_POSSESS_AI = auto()
    VER_UE4_FTEXT_HISTORY_DATE_TIMEZONE = auto()
    VER_UE4_SORT_ACTIVE_BONE_INDICES = auto()
    VER_UE4_PERFRAME_MATERIAL_UNIFORM_EXPRESSIONS = auto()
    VER_UE4_MIKKTSPACE_IS_DEFAULT = auto()
    VER_UE4_LANDSCAPE_GRASS_COOKING = auto()
    VER_UE4_FIX_SKEL_VERT_ORIENT_MESH_PARTICLES = auto()
    VER_UE4_LANDSCAPE_STATIC_SECTION_OFFSET = auto()
    VER_UE4_ADD_MODIFIERS_RUNTIME_GENERATION = auto()
    VER_UE4_MATERIAL_MASKED_BLENDMODE_TIDY = auto()
    VER_UE4_MERGED_ADD_MODIFIERS_RUNTIME_GENERATION_TO_4_7_DEPRECATED = auto()
    VER_UE4_AFTER_MERGED_ADD_MODIFIERS_RUNTIME_GENERATION_TO_4_7_DEPRECATED = auto()
    VER_UE4_MERGED_ADD_MODIFIERS_RUNTIME_GENERATION_TO_4_7 = auto()
    VER_UE4_AFTER_MERGING_ADD_MODIFIERS_RUNTIME_GENERATION_TO_4_7 = auto()
    VER_UE4_SERIALIZE_LANDSCAPE_GRASS_DATA = auto()
    VER_UE4_OPTIONALLY_CLEAR_GPU_EMITTERS_ON_INIT = auto()
    VER_UE4_SERIALIZE_LANDSCAPE_GRASS_DATA_MATERIAL_GUID = auto()
    VER_UE4_BLUEPRINT_GENERATED_CLASS_COMPONENT_TEMPLATES_PUBLIC = auto()
    VER_UE4_ACTOR_COMPONENT_CREATION_METHOD = auto()
    VER_UE4_K2NODE_EVENT_MEMBER_REFERENCE = auto()
    VER_UE4_STRUCT_GUID_IN_PROPERTY_TAG = auto()
    VER_UE4_REMOVE_UNUSED_UPOLYS_FROM_UMODEL = auto()
    VER_UE4_REBUILD_HIERARCHICAL_INSTANCE_TREES = auto()
    VER_UE4_PACKAGE_SUMMARY_HAS_COMPATIBLE_ENGINE_VERSION = auto()
    VER_UE4_TRACK_UCS_MODIFIED_PROPERTIES = auto()
    VER_UE4_LANDSCAPE_SPLINE_CROSS_LEVEL_MESHES = auto()
    VER_UE4_DEPRECATE_USER_WIDGET_DESIGN_SIZE = auto()
    VER_UE4_ADD_EDITOR_VIEWS = auto()
    VER_UE4_FOLIAGE_WITH_ASSET_OR_CLASS = auto()
    VER_UE4_BODYINSTANCE_BINARY_SERIALIZATION = auto()
    VER_UE4_SERIALIZE_BLUEPRINT_EVENTGRAPH_FASTCALLS_IN_UFUNCTION = auto()
    VER_UE4_INTERPCURVE_SUPPORTS_LOOPING = auto()
    VER_UE4_MATERIAL_INSTANCE_BASE_PROPERTY_OVERRIDES_DITHERED_LOD_TRANSITION = auto()
    VER_UE4_SERIALIZE_LANDSCAPE_ES2_TEXTURES = auto()
    VER_UE4_CONSTRAINT_INSTANCE_MOTOR_FLAGS = auto()
    VER_UE4_SERIALIZE_PINTYPE_CONST = auto()
    VER_UE4_LIBRARY_CATEGORIES_AS_FTEXT = auto()
    VER_UE4_SKIP_DUPLICATE_EXPORTS_ON_SAVE_PACKAGE = auto()
    VER_UE4_SERIALIZE_TEXT_IN_PACKAGES = auto()
    VER_UE4_ADD_BLEND_MODE_TO_WIDGET_COMPONENT = auto()
    VER_UE4_NEW_LIGHTMASS_PRIMITIVE_SETTING = auto()
    VER_UE4_REPLACE_SPRING_NOZ_PROPERTY = auto()
    VER_UE4_TIGHTLY_PACKED_ENUMS = auto()
    VER_UE4_ASSET_IMPORT_DATA_AS_JSON = auto()
    VER_UE4_TEXTURE_LEGACY_GAMMA = auto()
    VER_UE4_ADDED_NATIVE_SERIALIZATION_FOR_IMMUTABLE_STRUCTURES = auto()
    VER_UE4_DEPRECATE_UMG_STYLE_OVERRIDES = auto()
    VER_UE4_STATIC_SHADOWMAP_PENUMBRA_SIZE = auto()
    VER_UE4_NIAGARA_DATA_OBJECT_DEV_UI_FIX = auto()
    VER_UE4_FIXED_DEFAULT_ORIENTATION_OF_WIDGET_COMPONENT = auto()
    VER_UE4_REMOVED_MATERIAL_USED_WITH_UI_FLAG = auto()
    VER_UE4_CHARACTER_MOVEMENT_ADD_BRAKING_FRICTION = auto()
    VER_UE4_BSP_UNDO_FIX = auto()
    VER_UE4_DYNAMIC_PARAMETER_DEFAULT_VALUE = auto()
    VER_UE4_STATIC_MESH_EXTENDED_BOUNDS = auto()
    VER_UE4_ADDED_NON_LINEAR_TRANSITION_BLENDS = auto()
    VER_UE4_AO_MATERIAL_MASK = auto()
    VER_UE4_NAVIGATION_AGENT_SELECTOR = auto()
    VER_UE4_MESH_PARTICLE_COLLISIONS_CONSIDER_PARTICLE_SIZE = auto()
    VER_UE4_BUILD_MESH_ADJ_BUFFER_FLAG_EXPOSED = auto()
    VER_UE4_MAX_ANGULAR_VELOCITY_DEFAULT = auto()
    VER_UE4_APEX_CLOTH_TESSELLATION = auto()
    VER_UE4_DECAL_SIZE = auto()
    VER_UE4_KEEP_ONLY_PACKAGE_NAMES_IN_STRING_ASSET_REFERENCES_MAP = auto()
    VER_UE4_COOKED_ASSETS_IN_EDITOR_SUPPORT = auto()
    VER_UE4_DIALOGUE_WAVE_NAMESPACE_AND_CONTEXT_CHANGES = auto()
    VER_UE4_MAKE_ROT_RENAME_AND_REORDER = auto()
    VER_UE4_K2NODE_VAR_REFERENCEGUIDS = auto()
    VER_UE4_SOUND_CONCURRENCY_PACKAGE = auto()
    VER_UE4_USERWIDGET_DEFAULT_FOCUSABLE_FALSE = auto()
    VER_UE4_BLUEPRINT_CUSTOM_EVENT_CONST_INPUT = auto()
    VER_UE4_USE_LOW_PASS_FILTER_FREQ = auto()
    VER_UE4_NO_ANIM_BP_CLASS_IN_GAMEPLAY_CODE = auto()
    VER_UE4_SCS_STORES_ALLNODES_ARRAY = auto()
    VER_UE4_FBX_IMPORT_DATA_RANGE_ENCAPSULATION = auto()
    VER_UE4_CAMERA_COMPONENT_ATTACH_TO_ROOT = auto()
    VER_UE4_INSTANCED_STEREO_UNIFORM_UPDATE = auto()
    VER_UE4_STREAMABLE_TEXTURE_MIN_MAX_DISTANCE = auto()
    VER_UE4_INJECT_BLUEPRINT_STRUCT_PIN_CONVERSION_NODES = auto()
    VER_UE4_INNER_ARRAY_TAG_INFO = auto()
    VER_UE4_FIX_SLOT_NAME_DUPLICATION = auto()
    VER_UE4_STREAMABLE_TEXTURE_AABB = auto()
    VER_UE4_PROPERTY_GUID_IN_PROPERTY_TAG = auto()
    VER_UE4_NAME_HASHES_SERIALIZED = auto()
    VER_UE4_INSTANCED_STEREO_UNIFORM_REFACTOR = auto()
    VER_UE4_COMPRESSED_SHADER_RESOURCES = auto()
    VER_UE4_PRELOAD_DEPENDENCIES_IN_COOKED_EXPORTS = auto()
    VER_UE4_TemplateIndex_IN_COOKED_EXPORTS = auto()
    VER_UE4_PROPERTY_TAG_SET_MAP_SUPPORT = auto()
    VER_UE4_ADDED_SEARCHABLE_NAMES = auto()
    VER_UE4_64BIT_EXPORTMAP_SERIALSIZES = auto()
    VER_UE4_SKYLIGHT_MOBILE_IRRADIANCE_MAP = auto()
    VER_UE4_ADDED_SWEEP_WHILE_WALKING_FLAG = auto()
    VER_UE4_ADDED_SOFT_OBJECT_PATH = auto()
    VER_UE4_POINTLIGHT_SOURCE_ORIENTATION = auto()
    VER_UE4_ADDED_PACKAGE_SUMMARY_LOCALIZATION_ID = auto()
    VER_UE4_FIX_WIDE_STRING_CRC = auto()
    VER_UE4_ADDED_PACKAGE_OWNER = auto()
    VER_UE4_SKINWEIGHT_PROFILE_DATA_LAYOUT_CHANGES = auto()
    VER_UE4_NON_OUTER_PACKAGE_IMPORT = auto()
    VER_UE4_ASSETREGISTRY_DEPENDENCYFLAGS = auto()
    VER_UE4_CORRECT_LICENSEE_FLAG = auto()


class CoreObjectVersion(IntEnum):
    BEFORE_CUSTOM_VERSION_WAS_ADDED = 0
    MATERIAL_INPUT_NATIVE_SERIALIZE = auto()
    ENUM_PROPERTIES = auto()
    SKELETAL_MATERIAL_EDITOR_DATA_STRIPPING = auto()
    FPROPERTIES = auto()


class EditorObjectVersion(IntEnum):
    BEFORE_CUSTOM_VERSION_WAS_ADDED = 0
    GATHERED_TEXT_PROCESS_VERSION_FLAGGING = auto()
    GATHERED_TEXT_PACKAGE_CACHE_FIXES_V1 = auto()
    ROOT_META_DATA_SUPPORT = auto()
    GATHERED_TEXT_PACKAGE_CACHE_FIXES_V2 = auto()
    TEXT_FORMAT_ARGUMENT_DATA_IS_VARIANT = auto()
    SPLINE_COMPONENT_CURVES_IN_STRUCT = auto()
    COMBO_BOX_CONTROLLER_SUPPORT_UPDATE = auto()
    REFACTOR_MESH_EDITOR_MATERIALS = auto()
    ADDED_FONT_FACE_ASSETS = auto()
    UPROPERTY_FOR_MESH_SECTION = auto()
    WIDGET_GRAPH_SCHEMA = auto()
    ADDED_BACKGROUND_BLUR_CONTENT_SLOT = auto()
    STABLE_USER_DEFINED_ENUM_DISPLAY_NAMES = auto()
    ADDED_INLINE_FONT_FACE_ASSETS = auto()
    UPROPERTY_FOR_MESH_SECTION_SERIALIZE = auto()
    FAST_WIDGET_TEMPLATES = auto()
    MATERIAL_THUMBNAIL_RENDERING_CHANGES = auto()
    NEW_SLATE_CLIPPING_SYSTEM = auto()
    MOVIE_SCENE_META_DATA_SERIALIZATION = auto()
    GATHERED_TEXT_EDITOR_ONLY_PACKAGE_LOC_ID = auto()
    ADDED_ALWAYS_SIGN_NUMBER_FORMATTING_OPTION = auto()
    ADDED_MATERIAL_SHARED_INPUTS = auto()
    ADDED_MORPH_TARGET_SECTION_INDICES = auto()
    SERIALIZE_INSTANCED_STATIC_MESH_RENDER_DATA = auto()
    MESH_DESCRIPTION_NEW_SERIALIZATION_MOVED_TO_RELEASE = auto()
    MESH_DESCRIPTION_NEW_ATTRIBUTE_FORMAT = auto()
    CHANGE_SCENE_CAPTURE_ROOT_COMPONENT = auto()
    STATIC_MESH_DEPRECATED_RAW_MESH = auto()
    MESH_DESCRIPTION_BULK_DATA_GUID = auto()
    MESH_DESCRIPTION_REMOVED_HOLES = auto()
    CHANGED_WIDGET_COMPONENT_WINDOW_VISIBILITY_DEFAULT = auto()
    CULTURE_INVARIANT_TEXT_SERIALIZATION_KEY_STABILITY = auto()
    SCROLL_BAR_THICKNESS_CHANGE = auto()
    REMOVE_LANDSCAPE_HOLE_MATERIAL = auto()
    MESH_DESCRIPTION_TRIANGLES = auto()
    COMPUTE_WEIGHTED_NORMALS = auto()
    SKELETAL_MESH_BUILD_REFACTOR = auto()
    SKELETAL_MESH_MOVE_EDITOR_SOURCE_DATA_TO_PRIVATE_ASSET = auto()
    NUMBER_PARSING_OPTIONS_NUMBER_LIMITS_AND_CLAMPING = auto()
    SKELETAL_MESH_SOURCE_DATA_SUPPORT_16BIT_OF_MATERIAL_NUMBER = auto()


class FrameworkObjectVersion(IntEnum):
    BEFORE_CUSTOM_VERSION_WAS_ADDED = 0
    USE_BODY_SETUP_COLLISION_PROFILE = auto()
    ANIM_BLUEPRINT_SUBGRAPH_FIX = auto()
    MESH_SOCKET_SCALE_UTILIZATION = auto()
    EXPLICIT_ATTACHMENT_RULES = auto()
    MOVE_COMPRESSED_ANIM_DATA_TO_THE_DDC = auto()
    FIX_NON_TRANSACTIONAL_PINS = auto()
    SMART_NAME_REFACTOR = auto()
    ADD_SOURCE_REFERENCE_SKELETON_TO_RIG = auto()
    CONSTRAINT_INSTANCE_BEHAVIOR_PARAMETERS = auto()
    POSE_ASSET_SUPPORT_PER_BONE_MASK = auto()
    PHYS_ASSET_USE_SKELETAL_BODY_SETUP = auto()
    REMOVE_SOUND_WAVE_COMPRESSION_NAME = auto()
    ADD_INTERNAL_CLOTHING_GRAPHICAL_SKINNING = auto()
    WHEEL_OFFSET_IS_FROM_WHEEL = auto()
    MOVE_CURVE_TYPES_TO_SKELETON = auto()
    CACHE_DESTRUCTIBLE_OVERLAPS = auto()
    GEOMETRY_CACHE_MISSING_MATERIALS = auto()
    LODS_USE_RESOLUTION_INDEPENDENT_SCREEN_SIZE = auto()
    BLEND_SPACE_POST_LOAD_SNAP_TO_GRID = auto()
    SUPPORT_BLEND_SPACE_RATE_SCALE = auto()
    LOD_HYSTERESIS_USE_RESOLUTION_INDEPENDENT_SCREEN_SIZE = auto()
    CHANGE_AUDIO_COMPONENT_OVERRIDE_SUBTITLE_PRIORITY_DEFAULT = auto()
    HARD_SOUND_REFERENCES = auto()
    ENFORCE_CONST_IN_ANIM_BLUEPRINT_FUNCTION_GRAPHS = auto()
    INPUT_KEY_SELECTOR_TEXT_STYLE = auto()
    ED_GRAPH_PIN_CONTAINER_TYPE = auto()
    CHANGE_ASSET_PINS_TO_STRING = auto()
    LOCAL_VARIABLES_BLUEPRINT_VISIBLE = auto()
    REMOVE_UFIELD_NEXT = auto()
    USER_DEFINED_STRUCTS_BLUEPRINT_VISIBLE = auto()
    PINS_STORE_FNAME = auto()
    USER_DEFINED_STRUCTS_STORE_DEFAULT_INSTANCE = auto()
    FUNCTION_TERMINATOR_NODES_USE_MEMBER_REFERENCE = auto()
    EDITABLE_EVENTS_USE_CONST_REF_PARAMETERS = auto()
    BLUEPRINT_GENERATED_CLASS_IS_ALWAYS_AUTHORITATIVE = auto()
    ENFORCE_BLUEPRINT_FUNCTION_VISIBILITY = auto()
    STORING_UCS_SERIALIZATION_INDEX = auto()


@dataclass(frozen=True)
class CustomVersionSubsystem:
    name: str
    key: UUID
    versions: Type[IntEnum]

    @property
    def latest(self) -> IntEnum:
        return max(self.versions)


CUSTOM_VERSION_SUBSYSTEMS: Dict[UUID, CustomVersionSubsystem] = {
    s.key: s
    for s in (
        CustomVersionSubsystem(
            "FCoreObjectVersion",
            UUID("375ec13c-06e4-48fb-b500-84f0262a717e"),
            CoreObjectVersion,
        ),
        CustomVersionSubsystem(
            "FEditorObjectVersion",
            UUID("e4b068ed-f494-42e9-a231-da0b2e46bb41"),
            EditorObjectVersion,
        ),
        CustomVersionSubsystem(
            "FFrameworkObjectVersion",
            UUID("cffc743f-43b0-4480-9391-14df171d2073"),
            FrameworkObjectVersion,
        ),
    )
}


@dataclass(frozen=True)
class CustomVersionEntry:
    """One ``(subsystem key, version)`` pair from a file's custom versions.

    ``resolved`` is ``None`` for subsystems this parser has no table for.
    """

    key: UUID
    version: int
    resolved: Optional[IntEnum] = None

    @property
    def subsystem_name(self) -> Optional[str]:
        subsystem = CUSTOM_VERSION_SUBSYSTEMS.get(self.key)
        return subsystem.name if subsystem else None


@dataclass(frozen=True)
class FileVersions:
    """Every version a file was saved with, already resolved."""

    legacy: LegacyFileVersion
    object: ObjectVersion
    licensee: int = 0
    custom: Tuple[CustomVersionEntry, ...] = ()
    filter_editor_only: bool = False

    def custom_version(self, key: UUID) -> Optional[int]:
        for entry in self.custom:
            if entry.key == key:
                return entry.resolved if entry.resolved is not None else entry.version
        return None


@dataclass(frozen=True)
class FieldGate:
    """A version-gated field: present from ``since`` up to, but not
    including, ``removed_in``."""

    field: str
    namespace: Namespace
    since: Optional[IntEnum] = None
    removed_in: Optional[IntEnum] = None
    editor_only: bool = False
    subsystem: Optional[UUID] = None


_O = ObjectVersion

FIELD_GATES: Tuple[FieldGate, ...] = (
    # Summary fields, in on-disk order.
    FieldGate(
        "localization_id",
        Namespace.OBJECT,
        since=_O.VER_UE4_ADDED_PACKAGE_SUMMARY_LOCALIZATION_ID,
        editor_only=True,
    ),
    FieldGate(
        "gatherable_text_data",
        Namespace.OBJECT,
        since=_O.VER_UE4_SERIALIZE_TEXT_IN_PACKAGES,
    ),
    FieldGate(
        "soft_package_references",
        Namespace.OBJECT,
        since=_O.VER_UE4_ADD_STRING_ASSET_REFERENCES_MAP,
    ),
    FieldGate(
        "searchable_names_offset",
        Namespace.OBJECT,
        since=_O.VER_UE4_ADDED_SEARCHABLE_NAMES,
    ),
    FieldGate(
        "persistent_guid",
        Namespace.OBJECT,
        since=_O.VER_UE4_ADDED_PACKAGE_OWNER,
        editor_only=True,
    ),
    FieldGate(
        "owner_persistent_guid",
        Namespace.OBJECT,
        since=_O.VER_UE4_ADDED_PACKAGE_OWNER,
        removed_in=_O.VER_UE4_NON_OUTER_PACKAGE_IMPORT,
        editor_only=True,
    ),
    FieldGate(
        "engine_changelist",
        Namespace.OBJECT,
        removed_in=_O.VER_UE4_ENGINE_VERSION_OBJECT,
    ),
    FieldGate(
        "saved_by_engine_version",
        Namespace.OBJECT,
        since=_O.VER_UE4_ENGINE_VERSION_OBJECT,
    ),
    FieldGate(
        "compatible_with_engine_version",
        Namespace.OBJECT,
        since=_O.VER_UE4_PACKAGE_SUMMARY_HAS_COMPATIBLE_ENGINE_VERSION,
    ),
    FieldGate(
        "texture_allocations",
        Namespace.LEGACY,
        removed_in=LegacyFileVersion.REMOVED_TEXTURE_ALLOCATION_INFO,
    ),
    FieldGate(
        "world_tile_info_data_offset",
        Namespace.OBJECT,
        since=_O.VER_UE4_WORLD_LEVEL_INFO,
    ),
    FieldGate(
        "chunk_id",
        Namespace.OBJECT,
        since=_O.VER_UE4_ADDED_CHUNKID_TO_ASSETDATA_AND_UPACKAGE,
        removed_in=_O.VER_UE4_CHANGED_CHUNKID_TO_BE_AN_ARRAY_OF_CHUNKIDS,
    ),
    FieldGate(
        "chunk_ids",
        Namespace.OBJECT,
        since=_O.VER_UE4_CHANGED_CHUNKID_TO_BE_AN_ARRAY_OF_CHUNKIDS,
    ),
    FieldGate(
        "preload_dependencies",
        Namespace.OBJECT,
        since=_O.VER_UE4_PRELOAD_DEPENDENCIES_IN_COOKED_EXPORTS,
    ),
    # Members of table elements.
    FieldGate(
        "name_hashes",
        Namespace.OBJECT,
        since=_O.VER_UE4_NAME_HASHES_SERIALIZED,
    ),
    FieldGate(
        "import_package_name",
        Namespace.OBJECT,
        since=_O.VER_UE4_NON_OUTER_PACKAGE_IMPORT,
        editor_only=True,
    ),
    FieldGate(
        "export_template_index",
        Namespace.OBJECT,
        since=_O.VER_UE4_TemplateIndex_IN_COOKED_EXPORTS,
    ),
    FieldGate(
        "export_64bit_serial_sizes",
        Namespace.OBJECT,
        since=_O.VER_UE4_64BIT_EXPORTMAP_SERIALSIZES,
    ),
    FieldGate(
        "export_not_always_loaded_for_editor_game",
        Namespace.OBJECT,
        since=_O.VER_UE4_LOAD_FOR_EDITOR_GAME,
    ),
    FieldGate(
        "export_is_asset",
        Namespace.OBJECT,
        since=_O.VER_UE4_COOKED_ASSETS_IN_EDITOR_SUPPORT,
    ),
    FieldGate(
        "export_preload_dependencies",
        Namespace.OBJECT,
        since=_O.VER_UE4_PRELOAD_DEPENDENCIES_IN_COOKED_EXPORTS,
    ),
    FieldGate(
        "soft_package_reference_names",
        Namespace.OBJECT,
        since=_O.VER_UE4_KEEP_ONLY_PACKAGE_NAMES_IN_STRING_ASSET_REFERENCES_MAP,
    ),
)

_GATES_BY_FIELD: Dict[str, FieldGate] = {g.field: g for g in FIELD_GATES}

# Object version written by each engine release's editor.
ENGINE_RELEASES: Dict[str, ObjectVersion] = {
    "4.10": _O.VER_UE4_APEX_CLOTH_TESSELLATION,
    "4.11": _O.VER_UE4_STREAMABLE_TEXTURE_MIN_MAX_DISTANCE,
    "4.12": _O.VER_UE4_NAME_HASHES_SERIALIZED,
    "4.13": _O.VER_UE4_INSTANCED_STEREO_UNIFORM_REFACTOR,
    "4.14": _O.VER_UE4_TemplateIndex_IN_COOKED_EXPORTS,
    "4.15": _O.VER_UE4_ADDED_SEARCHABLE_NAMES,
    "4.16": _O.VER_UE4_ADDED_SWEEP_WHILE_WALKING_FLAG,
    "4.17": _O.VER_UE4_ADDED_SWEEP_WHILE_WALKING_FLAG,
    "4.18": _O.VER_UE4_ADDED_SOFT_OBJECT_PATH,
    "4.19": _O.VER_UE4_ADDED_PACKAGE_SUMMARY_LOCALIZATION_ID,
    "4.20": _O.VER_UE4_ADDED_PACKAGE_SUMMARY_LOCALIZATION_ID,
    "4.21": _O.VER_UE4_FIX_WIDE_STRING_CRC,
    "4.22": _O.VER_UE4_FIX_WIDE_STRING_CRC,
    "4.23": _O.VER_UE4_FIX_WIDE_STRING_CRC,
    "4.24": _O.VER_UE4_ADDED_PACKAGE_OWNER,
    "4.25": _O.VER_UE4_ADDED_PACKAGE_OWNER,
    "4.26": _O.VER_UE4_CORRECT_LICENSEE_FLAG,
}


def _rank(namespace: Namespace, value: int) -> int:
    # Legacy tags grow more negative as the container evolves.
    return -int(value) if namespace is Namespace.LEGACY else int(value)


def _newest(namespace: Namespace) -> int:
    if namespace is Namespace.LEGACY:
        return min(LegacyFileVersion)
    return max(ObjectVersion)


def resolve(
    raw: int, namespace: Namespace, subsystem: Optional[UUID] = None
) -> IntEnum:
    """Map a raw version integer onto a known constant.

    Legacy and object versions are enumerated exhaustively, so any value that
    is not a member (too new, too old, or a hole in the table) is rejected
    rather than rounded. Custom versions need the subsystem key.
    """
    if namespace is Namespace.CUSTOM:
        if subsystem is None:
            raise ValueError("custom versions need a subsystem key")
        return resolve_custom(raw, subsystem)
    enum: Type[IntEnum] = (
        LegacyFileVersion if namespace is Namespace.LEGACY else ObjectVersion
    )
    newest = _newest(namespace)
    if _rank(namespace, raw) > _rank(namespace, newest):
        raise unsupported_version(
            raw,
            namespace.value,
            f"{namespace.value} version {raw} is newer than the newest known "
            f"version {int(newest)}",
        )
    try:
        return enum(raw)
    except ValueError:
        raise unsupported_version(
            raw,
            namespace.value,
            f"{namespace.value} version {raw} is not a known version",
        ) from None


def subsystem_for(key: UUID) -> Optional[CustomVersionSubsystem]:
    return CUSTOM_VERSION_SUBSYSTEMS.get(key)


def resolve_custom(raw: int, key: UUID) -> IntEnum:
    """Resolve a subsystem's custom version.

    Values between two known constants resolve to the nearest lower one; a
    custom version only ever acts as a threshold.
    """
    subsystem = CUSTOM_VERSION_SUBSYSTEMS.get(key)
    if subsystem is None:
        raise ValueError(f"no custom version table for subsystem {key}")
    members: List[IntEnum] = sorted(subsystem.versions)
    if raw > members[-1]:
        raise unsupported_version(
            raw,
            Namespace.CUSTOM.value,
            f"{subsystem.name} version {raw} is newer than the newest known "
            f"version {int(members[-1])}",
            subsystem=subsystem.name,
            key=str(key),
        )
    idx = bisect.bisect_right([int(m) for m in members], raw) - 1
    if idx < 0:
        raise unsupported_version(
            raw,
            Namespace.CUSTOM.value,
            f"{subsystem.name} version {raw} is older than every known version",
            subsystem=subsystem.name,
            key=str(key),
        )
    return members[idx]


def gate_for(field_name: str) -> FieldGate:
    try:
        return _GATES_BY_FIELD[field_name]
    except KeyError:
        raise KeyError(f"{field_name!r} is not a version-gated field") from None


def threshold(field_name: str) -> IntEnum:
    """Minimum version at which ``field_name`` is present."""
    gate = gate_for(field_name)
    if gate.since is not None:
        return gate.since
    if gate.namespace is Namespace.LEGACY:
        return max(LegacyFileVersion)
    if gate.namespace is Namespace.CUSTOM and gate.subsystem is not None:
        return min(CUSTOM_VERSION_SUBSYSTEMS[gate.subsystem].versions)
    return min(ObjectVersion)


def _version_in(gate: FieldGate, versions: FileVersions) -> Optional[int]:
    if gate.namespace is Namespace.LEGACY:
        return versions.legacy
    if gate.namespace is Namespace.OBJECT:
        return versions.object
    if gate.subsystem is None:
        raise malformed(f"custom gate {gate.field!r} names no subsystem")
    return versions.custom_version(gate.subsystem)


def evaluate(gate: FieldGate, versions: FileVersions) -> bool:
    if gate.editor_only and versions.filter_editor_only:
        return False
    version = _version_in(gate, versions)
    if version is None:
        # Subsystem absent from the file: nothing it gates was written.
        return False
    rank = _rank(gate.namespace, version)
    if gate.since is not None and rank < _rank(gate.namespace, gate.since):
        return False
    if gate.removed_in is not None and rank >= _rank(
        gate.namespace, gate.removed_in
    ):
        return False
    return True


def is_present(field_name: str, versions: FileVersions) -> bool:
    return evaluate(gate_for(field_name), versions)


def custom_version_of(header, key: UUID) -> Optional[int]:
    """Look up a subsystem's version in a parsed header (or ``FileVersions``).

    Returns the resolved constant for registered subsystems, the raw integer
    for unregistered ones, and ``None`` when the file carries no entry for
    ``key``.
    """
    versions: FileVersions = getattr(header, "versions", header)
    return versions.custom_version(key)


def iter_gates(namespace: Optional[Namespace] = None) -> Iterable[FieldGate]:
    for gate in FIELD_GATES:
        if namespace is None or gate.namespace is namespace:
            yield gate

